from setuptools import setup, find_packages

setup(
    name="actionflow",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages("src", exclude=["tests", "tests.*"]),
    install_requires=[
        "pydantic>=2.0",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    python_requires=">=3.8",
    description="minimal action-graph execution engine for async node/flow pipelines",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
)
