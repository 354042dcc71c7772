[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spokedarts"
version = "0.1.0"
description = "Geometric building blocks for spoke-dart maximal Poisson-disk sampling: point arithmetic, a seedable subtract-with-borrow random source, line piercings, range trees, brute-force sphere searches and spacing histograms."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "poisson-disk",
    "blue-noise",
    "sampling",
    "spoke-darts",
    "range-tree",
    "geometry",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["spokedarts"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
