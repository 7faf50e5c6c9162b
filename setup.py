from setuptools import setup, find_packages

setup(
    name="openai-api",
    version="0.4.0",
    description="Typed Python client for the OpenAI HTTP API",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    install_requires=[
        "python-dotenv",
        "requests"
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
)
