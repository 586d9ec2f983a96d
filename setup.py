from setuptools import setup, find_packages

setup(
    name="object_printing",
    version="0.1.0",
    packages=find_packages(include=["object_printing", "object_printing.*"]),
    install_requires=[
        "pydantic>=2",
        "pydantic-settings",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
        ],
    },
    python_requires=">=3.8",
) 
