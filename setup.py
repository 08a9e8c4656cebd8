#!/usr/bin/env python

from setuptools import setup


VERSION = "0.1a1"

setup(
    name="lxml-typed",
    version=VERSION,
    description="Typed node handles over lxml trees for configuration files.",
    packages=["lxml_typed"],
    python_requires=">=3.7",
    install_requires=["lxml"],
    extras_require={"tests": ["pytest"]},
)
