"""
Setup script for Columbus Log Converter package.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read requirements
requirements_path = Path(__file__).parent / "requirements.txt"
with open(requirements_path) as f:
    requirements = [line.strip() for line in f if line.strip()
                    and not line.startswith("#")]

# Read README if it exists
readme_path = Path(__file__).parent / "README.md"
long_description = ""
if readme_path.exists():
    with open(readme_path, encoding="utf-8") as f:
        long_description = f.read()

setup(
    name="columbus-log-converter",
    version="1.0.0",
    description="Convert Columbus V-900 GPS/audio logger CSV files into tracks and audio waypoints",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Columbus Log Converter Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: GIS",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    keywords="gps columbus v-900 csv track waypoint audio",
    entry_points={
        "console_scripts": [
            "columbus-log-converter=columbus_log_converter.cli:main",
        ],
    },
)
