from setuptools import setup, find_packages

setup(
    name="callspy",
    version="0.1.0",
    description="Call-recording spies for Python tests",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
