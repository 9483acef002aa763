import os
from setuptools import setup, find_packages

HERE = os.path.abspath(os.path.dirname(__file__))


def parse_requirements(rel_path):
    path = os.path.join(HERE, rel_path)
    with open(path, "r") as f:
        lines = f.read().splitlines()
    return [line.strip() for line in lines if line.strip() and not line.startswith("#")]


with open(os.path.join(HERE, "README.md"), encoding="utf-8") as f:
    long_description = f.read()


setup(
    name="componentscan",
    version="0.1.0",
    description="Inventory of exported UI components and functions in JS/TS sources using Tree-sitter",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.11",
    install_requires=parse_requirements("componentscan/requirements.txt"),
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "componentscan=componentscan.main:main",
        ],
    },
    package_data={
        "componentscan": ["requirements.txt"],
        "componentscan.mcp": ["tool_descriptions.toml"],
    },
    include_package_data=True,
)
