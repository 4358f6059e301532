[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "numlab"
version = "0.1.0"
description = "Small numerical kernels: 2-D vectors, Gram-Schmidt, tridiagonal Jacobi solves, chemical equilibria, Gauss quadrature and worksharing examples"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "numerical",
    "linear-algebra",
    "gram-schmidt",
    "jacobi",
    "tridiagonal",
    "quadrature",
    "domain-decomposition",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
numlab-tridiagonal = "numlab.tridiagonal:main"
numlab-partitioned = "numlab.partitioned:main"
numlab-chemistry = "numlab.chemistry:main"
numlab-quadrature = "numlab.quadrature:main"
numlab-drivers = "numlab.drivers:main"
numlab-yax = "numlab.yax:main"
numlab-examples = "numlab.examples:main"

[tool.hatch.build.targets.wheel]
packages = ["numlab"]

[tool.hatch.build.targets.sdist]
include = ["numlab", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
