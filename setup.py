#!/usr/bin/env python3
"""
Setup script for namedroutes.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text() if readme_file.exists() else ""

setup(
    name="namedroutes",
    version="0.3.0",
    description="Named URL route patterns: parse, build and match with optional segments",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="namedroutes Contributors",
    packages=find_packages(include=["namedroutes", "namedroutes.*"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "click>=8.1.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "hypothesis>=6.80.0",
        ],
        "test": [
            "pytest>=7.4.0",
            "hypothesis>=6.80.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "namedroutes=namedroutes.cli.__main__:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Internet :: WWW/HTTP",
        "Topic :: Software Development :: Libraries",
    ],
    keywords="url routing route patterns reverse url builder",
)
