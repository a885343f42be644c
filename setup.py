#!/usr/bin/env python3
"""
Setup script for the Artist Database package.
"""

import re

from setuptools import setup, find_packages

# Read metadata from package without importing it
version = {}
with open("artist_db/__init__.py") as f:
    for match in re.finditer(r'^(__\w+__) = "([^"]*)"', f.read(), re.MULTILINE):
        version[match.group(1)] = match.group(2)

# Read requirements
with open("requirements.txt") as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith("#")]

setup(
    name="artist-db",
    version=version["__version__"],
    author=version["__author__"],
    description=version["__description__"],
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "artist_db.database": [
            "migrations/*.py",
            "migrations/versions/*.py",
        ],
    },
    install_requires=requirements,
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.9",
    entry_points={
        "console_scripts": [
            "artist-db=artist_db.cli.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Database",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    keywords="artists events locations database postgresql soft-delete",
)
