#!/usr/bin/env python3
"""
Setup script for the asal-site-backend package

Installs the shared library (`asal`) and the edge service (`edge`) from the
`backend/` source root.
"""

from setuptools import setup, find_packages

setup(
    name="asal-site-backend",
    version="0.1.0",
    package_dir={"": "backend"},
    packages=find_packages(where="backend", include=["asal", "asal.*", "edge", "edge.*"]),
    python_requires=">=3.9",
    install_requires=[
        # 🚀 Web Framework
        "fastapi>=0.104.1",
        "uvicorn[standard]>=0.24.0",
        "httpx>=0.25.2",

        # 📋 Data Validation & Settings
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "asal-check-categories=asal.i18n.categories:main",
        ],
    },
)
