# -*- coding: utf-8 -*-
"""
TSNCF - Time-Sensitive Networking Configuration Framework
Setup script for package installation
"""

from setuptools import setup, find_packages
import os


# 读取README文件
def read_readme():
    if not os.path.exists("README.md"):
        return ""
    with open("README.md", "r", encoding="utf-8") as fh:
        return fh.read()


setup(
    name="tsncf",
    version="1.0.0",
    author="TSNCF Development Team",
    description="Routing and AVB worst-case latency evaluation for TSN Ethernet networks",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "examples", "examples.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering",
        "Topic :: System :: Networking",
    ],
    python_requires=">=3.8",
    install_requires=[
        "networkx>=2.8",
        "numpy>=1.21.0",
        "pyyaml>=6.0",
        "pandas>=1.3.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=22.0.0",
            "flake8>=5.0.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "tsncf-solve=tsncf.cli:main",
        ],
    },
    package_data={"tsncf.config": ["*.yaml"]},
    include_package_data=True,
    zip_safe=False,
    keywords="tsn, avb, time-sensitive networking, routing, wcrt",
)
