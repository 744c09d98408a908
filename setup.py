from setuptools import setup, find_packages
import os

# Read the README file for long description
this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name="twig-vcs",
    version="0.3.0",
    description="twig - a small content-addressed version control system",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="twig",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "loguru>=0.7",
    ],
    extras_require={
        "test": [
            "pytest>=7",
        ],
    },
    entry_points={
        "console_scripts": [
            "twig=twig.cli:main",
        ],
    },
    python_requires=">=3.8",
    keywords="python git version-control vcs cli merge",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",

        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Version Control",
        "Environment :: Console",
        "Operating System :: OS Independent",
    ],
)
