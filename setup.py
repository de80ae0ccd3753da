from setuptools import setup, find_packages

setup(
    name="tic-converter",
    version="0.1.0",
    packages=find_packages(include=["tic_converter", "tic_converter.*"]),
    package_data={"tic_converter.schemas": ["*.yaml", "*.json"]},
    python_requires=">=3.9",
    install_requires=[
        "jsonschema>=4.19",
        "pandas>=2.2",
        "pyyaml>=6.0",
        "rich>=13.7",
        "python-dateutil>=2.9",
        "click>=8.1"
    ],
    extras_require={
        "test": ["pytest>=7.4"],
    },
    entry_points={
        "console_scripts": [
            "tic-convert=tic_converter.cli:main",
        ],
    },
)
