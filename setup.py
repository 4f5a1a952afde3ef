#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from setuptools import setup, find_packages

setup(
    name="spirv_cross_build",
    version="0.1.0",
    description="Feature-sliced build planner for the SPIRV-Cross native library",
    author="Max Qian",
    author_email="lightapt@example.com",
    packages=find_packages(include=["spirv_cross_build", "spirv_cross_build.*"]),
    python_requires=">=3.11",
    install_requires=[
        "loguru>=0.5.0",
        "pydantic>=2.0",
        "aiofiles>=23.1.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0.0",
            "pytest-asyncio>=0.21.0",
            "black>=21.5b2",
            "mypy>=0.812",
        ],
    },
    entry_points={
        "console_scripts": [
            "spirv-cross-build=spirv_cross_build.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Build Tools",
    ],
)
