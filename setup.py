#!/usr/bin/env python3
"""
quadnav - Setup Script
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_path = Path(__file__).parent / "README.md"
long_description = ""
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")

# Read requirements
requirements_path = Path(__file__).parent / "requirements.txt"
requirements = []
if requirements_path.exists():
    requirements = [
        line.strip()
        for line in requirements_path.read_text().splitlines()
        if line.strip() and not line.startswith("#")
    ]

setup(
    name="quadnav",
    version="0.1.0",
    description="Height and yaw autopilot for quadcopters over MSP",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering",
        "Topic :: Software Development :: Embedded Systems",
    ],
    packages=find_packages(include=["quadnav", "quadnav.*"]),
    python_requires=">=3.9",
    install_requires=requirements or [
        "pyserial>=3.5",
        "pyyaml>=6.0",
    ],
    extras_require={
        "full": [
            "flask>=2.0.0",
            "flask-cors>=3.0.0",
        ],
        "test": [
            "pytest>=7.0.0",
            "flask>=2.0.0",
            "flask-cors>=3.0.0",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "flask>=2.0.0",
            "flask-cors>=3.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "quadnav=quadnav.main:main",
        ],
    },
    include_package_data=True,
    data_files=[("config", ["config/default.yaml"])],
)
