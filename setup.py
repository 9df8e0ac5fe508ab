# SPDX-License-Identifier: LGPL-2.1-or-later
from setuptools import setup, find_packages


def readme():
    with open("README.md", encoding="utf-8") as f:
        return f.read()


def requirements():
    req = []
    with open("requirements.txt", encoding="utf-8") as fd:
        for line in fd:
            line = line.strip()
            if line and not line.startswith("#"):
                req.append(line)
    return req


def get_version():
    with open("libdynprefix/VERSION") as f:
        version = f.read().strip()
    return version


setup(
    name="dynprefix",
    version=get_version(),
    description="Load a pool derived from a delegated IPv6 prefix into "
    "strongSwan",
    long_description=readme(),
    long_description_content_type="text/markdown",
    license="LGPL2.1+",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=requirements(),
    extras_require={"test": ["pytest"]},
    python_requires=">=3.6",
    entry_points={
        "console_scripts": {
            "dynprefixctl = dynprefixctl.dynprefixctl:main",
        }
    },
    package_data={
        "libdynprefix": ["VERSION", "schemas/*.yaml"],
    },
)
