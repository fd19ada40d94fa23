"""
Setup configuration for graphExplorer package
"""

from setuptools import setup, find_packages

setup(
    name="graphExplorer",
    version="0.1.0",
    description="Interactive component dependency graph exploration model",
    author="graphExplorer Team",
    packages=find_packages(include=["graphExplorer", "graphExplorer.*"]),
    python_requires=">=3.8",
    install_requires=[
        "networkx>=2.6",
        "numpy>=1.20",
        "loguru>=0.5",
        "tqdm>=4.60",
        "pyyaml>=5.4",
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
