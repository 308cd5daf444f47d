"""
This script configures the installation of the 'termforge' Python package using setuptools.
Defines the package metadata, dependencies, and entry points for the command-line interface (CLI).
The CLI command 'termforge' is linked to the 'cli.termforge' function, which generates
starship.toml, wezterm.lua and shell plugin snippets from declarative resource files.

Run 'pip install -e .' to install the package in editable mode for development purposes.
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="termforge",
    version="0.1.0",
    description="Terminal configuration generator for prompts, WezTerm and shell plugins",
    long_description = long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={
        'termforge': [
            'palette/data/*.yaml',
            'library/data/*/*.yaml',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.8',
    install_requires=[
        'omegaconf',
        'click',
        'rich',
        'PyYAML',
        'requests',
        'tomlkit',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['termforge=termforge.cli:termforge'],
    },
)
