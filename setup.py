from setuptools import setup, find_packages

setup(
    name="servicekernel",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pyyaml>=6.0",
        "click>=8.0.0",
        "rich>=13.0.0",
        "tabulate>=0.9.0"
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0"
        ],
    },
    entry_points={
        "console_scripts": [
            "servicekernel=servicekernel.presentation.cli.main:cli",
        ],
    },
    python_requires=">=3.10",
)
