"""Setup script for the rdb-autoresize package."""

from setuptools import find_packages, setup

setup(
    name="rdb-autoresize",
    version="0.1.0",
    description="Automatic volume growth for managed database instances",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pyyaml",
        "python-dotenv",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-asyncio",
            "black",
            "isort",
            "mypy",
        ],
    },
    entry_points={
        "console_scripts": [
            "rdb-autoresize=rdb_autoresize.autoresizer:main",
        ],
    },
)
