from setuptools import setup, find_packages

setup(
    name="ghk-cursor",
    version="1.0.0",
    description="Real-time g-h-k filter tracking of a noisy 2D pointer with bounded display trails",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering",
    ],
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.20.0",
    ],
    extras_require={
        "dev": ["pytest", "black", "flake8"],
        "viz": ["matplotlib>=3.4.0"],
    },
    entry_points={
        "console_scripts": [
            "ghk-cursor-demo=ghk_cursor.cli:demo_cli",
        ],
    },
)
