# setup.py
from setuptools import setup

setup(
    name="BlockCollisionShapes",
    version="0.1.0",
    description="Extract, deduplicate and look up block-state collision shapes",
    packages=["collision", "render"],
    py_modules=["extract"],
    python_requires=">=3.8",
    install_requires=["panda3d"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["extract-block-shapes=extract:main"]},
)
