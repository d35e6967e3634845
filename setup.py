# setup.py

from setuptools import setup, find_packages

setup(
    name="DimerProbe",
    version="1.0.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "numpy",
        "matplotlib",
        "scipy",
        "numba",
        "pyyaml",
        "ase",
    ],
    extras_require={
        "matscipy": ["matscipy"],
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["dimerprobe=dimerprobe.cli.run:main"],
    },
)
