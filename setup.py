"""Setup file for development installation."""

from setuptools import setup, find_namespace_packages

setup(
    name="nyx-ai",
    version="0.1.0",
    packages=find_namespace_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "fastapi",
        "pydantic>=2",
        "pydantic-settings",
        "python-multipart",
        "uvicorn",
        "structlog",
        "prometheus-client",
        "opentelemetry-instrumentation-fastapi",
        "google-generativeai",
        "openai",
        "httpx",
        "beautifulsoup4",
        "pdfplumber",
        "jinja2",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": ["nyx-ai=nyx_ai.__main__:main"],
    },
)
