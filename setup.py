from setuptools import setup, find_packages


def _read_version():
    # Read the version from the package without importing it,
    # as the dependencies may not be installed yet
    with open("src/gffstream/__init__.py") as file:
        for line in file:
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"')
    raise RuntimeError("Cannot find version string")


setup(
    name="gffstream",
    version=_read_version(),
    description="Lazy GFF3 record streams, gene blocks and feature ranges",
    license="BSD-3-Clause",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.8",
    install_requires=["numpy >= 1.19"],
    extras_require={
        "test": ["pytest >= 7.0"],
    },
    zip_safe=False,
)
