from setuptools import setup, find_packages

setup(
    name="puppycare",
    version="0.3.0",
    description="Virtual puppy care simulation engine",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "numpy>=1.26",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "puppycare=puppycare.runtime:main",
        ]
    },
)
