[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "mrpfleet"
version = "0.1.0"
description = "Fleet fuel tracking for heavy equipment: units, fuel deliveries, fuel ratios and daily stock reports"
requires-python = ">=3.10"
dependencies = [
    "sqlalchemy>=2.0",
]
keywords = ["fleet", "fuel", "heavy equipment", "stock report", "sqlalchemy"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business",
    "Topic :: Database",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
]

[tool.setuptools.packages.find]
include = ["mrpfleet*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
