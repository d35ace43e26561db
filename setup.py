"""
Setup script for sdf2smiles.

Installs the sdf2smiles package with the sdf2smiles console command and the
sdf2smiles-gui window; Open Babel support is the optional "openbabel" extra.
"""

from setuptools import setup, find_packages
from pathlib import Path

readme = Path(__file__).with_name("README.md")
long_description = (
    readme.read_text(encoding="utf-8") if readme.is_file()
    else "Convert the molecule records of SDF files into SMILES strings."
)

setup(
    name="sdf2smiles",
    version="1.0.0",
    author="sdf2smiles developers",
    description="Convert the molecule records of SDF files into SMILES strings",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "rdkit",
        "pandas",
    ],
    extras_require={
        "openbabel": ["openbabel-wheel"],  # Alternative toolkit backend
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "sdf2smiles=sdf2smiles.main:main",
        ],
        "gui_scripts": [
            "sdf2smiles-gui=sdf2smiles.gui:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Chemistry",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
