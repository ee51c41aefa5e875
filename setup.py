#!/usr/bin/env python
# -*- encoding: utf-8 -*-

"""Setup Module for mongofix, declarative document-store fixtures for tests"""

import io
import re

from glob import glob
from os.path import basename, dirname, join, splitext

from setuptools import find_packages, setup


def read(*names, **kwargs):
    """Helper method to read files"""
    return io.open(
        join(dirname(__file__), *names),
        encoding=kwargs.get("encoding", "utf8"),
    ).read()


mongodb_requires = ["pymongo>=4.6.0"]

install_requires = [
    "pytest>=8.0.0",
    "rich>=13.7.0",
    "typer>=0.12.0",
    "typing_extensions>=4.8.0",
]

all_external_requires = mongodb_requires

testing_requires = all_external_requires + [
    "mock==5.1.0",
    "pytest-cov>=4.1.0",
    "pytest-mock==3.12.0",
    "pytest>=8.0.0",
]

dev_requires = testing_requires + [
    "black>=23.11.0",
    "check-manifest>=0.49",
    "coverage>=7.3.2",
    "isort>=5.12.0",
    "pre-commit>=2.16.0",
    "tox>=4.11.3",
    "twine>=4.0.2",
]

setup(
    name="mongofix",
    version="0.1.0",
    license="BSD 3-Clause License",
    description="Declarative collection fixtures for tests against document stores",
    long_description="%s\n%s"
    % (
        re.compile("^.. start-badges.*^.. end-badges", re.M | re.S).sub(
            "", read("README.rst")
        ),
        re.sub(":[a-z]+:`~?(.*?)`", r"``\1``", read("CHANGELOG.rst")),
    ),
    packages=find_packages("src"),
    package_dir={"": "src"},
    py_modules=[splitext(basename(path))[0] for path in glob("src/*.py")],
    include_package_data=True,
    zip_safe=False,
    python_requires=">=3.11",
    classifiers=[
        # complete classifier list: http://pypi.python.org/pypi?%3Aaction=list_classifiers
        "Development Status :: 3 - Alpha",
        "Framework :: Pytest",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Database",
        "Topic :: Software Development :: Testing",
    ],
    keywords=["mongodb", "pytest", "fixtures", "testing", "document store"],
    install_requires=install_requires,
    extras_require={
        "mongodb": mongodb_requires,
        "external": all_external_requires,
        "test": testing_requires,
        "tests": testing_requires,
        "testing": testing_requires,
        "dev": dev_requires,
        "all": dev_requires,
    },
    entry_points={
        "console_scripts": ["mongofix = mongofix.cli:app"],
        "pytest11": ["mongofix = mongofix.integrations.pytest.plugin"],
    },
)
