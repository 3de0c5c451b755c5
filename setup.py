#!/usr/bin/env python
from setuptools import setup, find_packages
from os import path
import sys

min_py_version = (3, 9)

if sys.version_info < min_py_version:
    sys.exit(
        "starrocks-driver is only supported for Python {}.{} or higher".format(*min_py_version)
    )

here = path.abspath(path.dirname(__file__))

long_description = (
    "A StarRocks dialect adapter for SQL-based business-intelligence driver frameworks."
)

# read in version number into __version__
with open(path.join(here, "src", "starrocks_driver", "version.py")) as f:
    exec(f.read())

with open(path.join(here, "requirements.txt")) as f:
    requirements = [line.split("#", 1)[0].rstrip() for line in f.readlines()]
    requirements = [line for line in requirements if line]

setup(
    name="starrocks-driver",
    version=__version__,
    description="StarRocks dialect translation and metadata introspection.",
    long_description=long_description,
    author="starrocks-driver contributors",
    license="Apache-2.0",
    keywords=[
        "starrocks",
        "mysql",
        "business intelligence",
        "database driver",
    ],
    package_dir={"": "src"},
    packages=find_packages(where="src", exclude=["contrib", "docs", "tests*"]),
    install_requires=requirements,
    extras_require={"test": ["pytest"]},
    python_requires=">={}.{}".format(*min_py_version),
)
