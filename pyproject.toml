[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fendcalc"
version = "1.0.1"
description = "Building blocks of a unit-aware calculator: errors, number syntax, lexer, calendar dates and terminal configuration"
requires-python = ">=3.11"
dependencies = []
keywords = ["calculator", "units", "lexer", "dates", "arithmetic"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fendcalc"]

[tool.hatch.build.targets.sdist]
include = ["fendcalc", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
