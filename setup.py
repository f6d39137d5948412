"""Setup script for the project."""

from setuptools import setup, find_packages

setup(
    name="exercise-tracker",
    version="1.0.0",
    description="Exercise logging web service backed by MongoDB",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "fastapi",
        "uvicorn",
        "motor",
        "pymongo",
        "pydantic>=2",
        "pydantic-settings",
        "python-multipart",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
            "mongomock-motor",
        ],
    },
    python_requires=">=3.10",
)
