# setup.py
from setuptools import setup, find_packages

setup(
    name="korisp",
    version="0.1.0",
    description="A small S-expression interpreter with typed call contracts and macros",
    packages=find_packages(include=["korisp", "korisp.*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={"test": ["pytest", "hypothesis"]},
    entry_points={"console_scripts": ["korisp=korisp.cli:main"]},
    zip_safe=False,
)
