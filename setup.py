# setup.py
from setuptools import setup, find_packages

setup(
    name="toylisp",
    version="0.3.0",
    description="A small tree-walking interpreter for a Lisp-like expression language",
    packages=find_packages(include=("toylisp", "toylisp.*")),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["toylisp = toylisp.cli:main"],
    },
    zip_safe=False,
)
