from setuptools import setup, find_packages

setup(
    name="qsort-grid-engine",
    version="1.2.0",
    description="Q-sort grid configuration engine (vetted catalog + bell distribution generation + structural validation + grid recommendation).",
    packages=find_packages(include=["qsort_grid", "qsort_grid.*"]),
    package_data={"qsort_grid": ["schema/*.json"]},
    install_requires=[
        "pandas>=2.0",
        "numpy>=1.23",
        "jsonschema>=4.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": ["qsort-grid=qsort_grid.cli:main"],
    },
    python_requires=">=3.10",
)
