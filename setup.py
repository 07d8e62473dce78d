from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="mrpcr",
    version="1.0.0",
    author="Josh Quick",
    author_email="j.quick@bham.ac.uk",
    license="GPL",
    description="A calculator for PCR master mixes and thermocycler programs.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/aresti/mrpcr",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "biopython>=1.79,<2",
        "click>=8,<9",
        "reportlab>=3.6",
    ],
    extras_require={"tests": ["pytest>=6", "pytest-click>=1"]},
    entry_points={"console_scripts": ["mrpcr = mrpcr.cli:main"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.7",
)
