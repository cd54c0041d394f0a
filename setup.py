"""
Setup configuration for buyside package.
"""

from setuptools import setup, find_packages

setup(
    name="buyside",
    version="1.0.0",
    description="AI-assisted ad campaign dashboard backed by Supabase and Gemini",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "supabase>=2.8.0",
        "google-genai>=1.0.0",
        "pydantic>=2.0.0",
        "pydantic-graph>=0.1.0,<2",
        "python-dotenv>=1.0.0",
        "click>=8.0.0",
        "streamlit>=1.37.0",
        "logfire>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "buyside=buyside.cli.main:main",
        ],
    },
)
