"""
FSS Engine Setup
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="fss-engine",
    version="1.0.0",
    author="FSS Engine Team",
    description="Fractal Sharded Secure Storage engine",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["fss", "fss.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pycryptodome>=3.19.0",
    ],
    extras_require={
        "crypto": [
            "argon2-cffi>=23.1.0",
        ],
        "dev": [
            "pytest>=7.4.0",
            "pytest-timeout>=2.2.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "fss-demo=fss.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Security :: Cryptography",
    ],
    keywords="encryption storage mandelbrot escape-time rewards",
)
