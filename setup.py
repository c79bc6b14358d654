# setup.py
from setuptools import find_packages, setup

setup(
    name="polycube-count",
    version="0.1.1",
    description="Enumerate polycubes up to rotation and reflection",
    python_requires=">=3.8",
    packages=find_packages(include=["geometry", "lattice", "engine", "common"]),
    py_modules=["count_shapes"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["count-shapes=count_shapes:cli"]},
)
