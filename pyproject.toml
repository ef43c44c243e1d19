[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "unitlore"
version = "0.1.0"
description = "Exact rational numerics, fuzzy name search and a parser for GNU-units-style definition files"
requires-python = ">=3.10"
dependencies = []
keywords = ["units", "unit conversion", "rational numbers", "parser", "definitions", "fuzzy search"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
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
packages = ["unitlore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
