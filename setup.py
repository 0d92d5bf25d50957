from setuptools import setup, find_packages

setup(
    name="floodfill",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["grow_region_from_seed"],
    install_requires=[
        "numpy",
        "zarr",
        "matplotlib",
    ],
    extras_require={
        "test": ["pytest"],
    },
    author="Volume Cartographer Team",
    author_email="info@volumecartographer.com",
    description="Predicate-driven flood fill region growing over N-dimensional grids",
    keywords="flood fill, region growing, segmentation, connectivity",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
    ],
    python_requires=">=3.8",
)
