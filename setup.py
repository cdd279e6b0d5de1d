"""
numinv - Setup

Client and CLI for telephone number inventory servers.
"""

from setuptools import setup, find_packages
import os

# Read the README
here = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(here, "README.md"), encoding="utf-8") as f:
    long_description = f.read()

# Read version
about = {}
with open(os.path.join(here, "numinv", "__init__.py"), encoding="utf-8") as f:
    for line in f:
        if line.startswith("__version__"):
            exec(line, about)
            break

setup(
    name="numinv",
    version=about["__version__"],
    description="Client and CLI for telephone number inventory servers",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "httpx>=0.24.0",
        "click>=8.1.0",
        "rich>=13.0.0",
        "pyyaml>=6.0",
        "keyring>=24.0.0",
        "platformdirs>=3.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "respx>=0.20",
            "mypy>=1.0",
            "black>=23.0",
            "ruff>=0.0.270",
        ],
    },
    entry_points={
        "console_scripts": [
            "numinv=numinv_cli.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Environment :: Console",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Communications :: Telephony",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Typing :: Typed",
    ],
    keywords=["telephony", "inventory", "e164", "reservation", "sfb", "cisco", "avaya"],
    package_data={
        "numinv": ["py.typed"],
    },
    zip_safe=False,
)
