#!/usr/bin/env python3
"""Python packaging configuration."""
import os
from pathlib import Path

from setuptools import find_packages, setup


def read_readme():
    """Read and return text of README.md."""
    pwd = os.path.abspath(os.path.dirname(__file__))
    readme_file = os.path.join(pwd, "README.md")
    with open(readme_file, "r", encoding="utf-8") as readme:
        readme_txt = readme.read()

    return readme_txt


def read_version():
    """Read and return text of VERSION."""
    return (
        Path(__file__)
        .parent.joinpath("VERSION")
        .read_text(encoding="utf-8")
        .strip()
    )


INSTALL_REQUIRES = [
    "azure-core >= 1.24",
    "azure-identity >= 1.10",
    "azure-mgmt-compute >= 17",
    "azure-mgmt-network >= 16",
    "azure-mgmt-resource >= 15, < 25",
    "click >= 8.0",
    "toml == 0.10.*",
]

EXTRAS_REQUIRE = {
    "test": [
        "mock",
        "pytest < 9.1",
        "pytest-mock",
    ],
}

setup(
    name="pyprovision",
    version=read_version(),
    description=(
        "Authenticate to Azure, provision a sandboxed virtual machine "
        "and tear it down"
    ),
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    author="pyprovision-devs",
    license="GNU General Public License v3 (GPLv3)",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,
    entry_points={
        "console_scripts": ["pyprovision = pyprovision.cli:main"],
    },
    zip_safe=True,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Natural Language :: English",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Utilities",
    ],
)
