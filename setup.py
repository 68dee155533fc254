# SPDX-License-Identifier: MIT
# Copyright (c) 2025 ripple-auth contributors

"""Setup configuration for ripple-auth package."""

from pathlib import Path

from setuptools import find_packages, setup

# Read the README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

setup(
    name="ripple-auth",
    version="0.1.0",
    author="ripple-auth contributors",
    description="Ripple ID OAuth 2.0 authentication strategy",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "examples", "examples.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.109.0",  # For the login/register/callback router
        "httpx>=0.27.0",  # For token exchange and identity profile requests
        "pydantic>=2.4.0",  # For strategy option validation and defaults
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "pylint>=3.0.0",
            "mypy>=1.0.0",
            "uvicorn>=0.27.0",  # For examples
        ],
    },
)
