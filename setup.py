#!/usr/bin/env python3
"""
htmlquery Setup
"""

import os

from setuptools import setup, find_packages

here = os.path.abspath(os.path.dirname(__file__))

# Read requirements from requirements.txt
with open(os.path.join(here, 'requirements.txt')) as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith('#')]

# Read long description from README.md
with open(os.path.join(here, 'README.md'), 'r', encoding='utf-8') as f:
    long_description = f.read()

setup(
    name="htmlquery",
    version="1.0.0",
    description="XPath 1.0 and CSS selector queries over HTML documents",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="htmlquery developers",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    entry_points={
        "console_scripts": [
            "htmlquery=htmlquery.main:main",
        ],
    },
    install_requires=requirements,
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Text Processing :: Markup :: HTML",
        "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
    ],
    keywords="html, xpath, css, selector, scraping, html5",
)
