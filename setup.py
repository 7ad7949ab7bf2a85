#!/usr/bin/env python3
"""
tbDEX DevTools for Python
"""

from setuptools import find_packages, setup

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="tbdex-devtools",
    version="0.1.0",
    author="tbDEX Contributors",
    description="Compact JWT signing with key-selected algorithms, plus example DIDs, offerings and RFQs for tbDEX testing.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.8",
    install_requires=[
        "python-jose[cryptography]>=3.3.0",
        "cryptography>=41.0.0",
        "base58>=2.1.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "tbdex-devtools=tbdex_devtools.cli:main",
        ],
    },
    keywords=[
        "tbdex",
        "did",
        "jwt",
        "jws",
        "verifiable-credentials",
        "secp256k1",
        "ed25519",
    ],
)
