"""
setup.py

Packaging metadata and CLI entry point for blogcast.

Version: 0.3.0 - Gemini transcription and blog generation behind a shared
retrying generation client, exposed through the CLI and the REST API.
"""
from setuptools import setup, find_packages

setup(
    name="blogcast",
    version="0.3.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "blogcast.prompts": ["*.yaml"],
    },
    install_requires=[
        "click",
        "pydantic>=2.0",
        "pyyaml",
        "jinja2",
        "httpx",
        "fastapi",
        "python-dotenv",
    ],
    extras_require={
        "api": [
            "uvicorn",
        ],
        "test": [
            "pytest",
            "pytest-asyncio",
            "hypothesis",
        ],
    },
    entry_points={
        "console_scripts": [
            "blogcast=cli:cli",
        ],
    },
    python_requires=">=3.8",
)
