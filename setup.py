"""
Setup configuration for compareGraph package
"""

from setuptools import setup, find_packages

setup(
    name="compareGraph",
    version="0.1.0",
    description="Tool comparison graph explorer with force-directed layout",
    author="compareGraph Team",
    packages=find_packages(include=["compareGraph", "compareGraph.*"]),
    python_requires=">=3.8",
    install_requires=[
        "networkx>=2.6",
        "numpy>=1.20",
        "loguru>=0.5",
        "tqdm>=4.60",
        "pyyaml>=5.4",
        "requests>=2.25",
        "matplotlib>=3.4",
        "python-dotenv>=0.19",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
)
