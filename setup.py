import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="msseg",
    version="0.1.0",
    author="Dennis Wittich",
    author_email="denniswittich@hotmail.de",
    description="Mean-shift filtering and segmentation of color images",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="",
    packages=setuptools.find_packages(),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "numba",
        "imageio>=2.16",
        "PyYAML",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=(
        "Programming Language :: Python :: 3",
    ),
)
