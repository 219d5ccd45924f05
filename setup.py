from setuptools import find_packages, setup

setup(
    name="dfprop",
    version="1.0.0",
    packages=find_packages(include=["dfprop", "dfprop.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0",
        "pyyaml>=6.0",
        "rich>=13.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
