[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vnakit"
version = "0.1.0"
description = "Calibration kit parsing, HPGL screen plot compilation and chart geometry for HP 8753 network analyzers"
requires-python = ">=3.10"
dependencies = []
keywords = ["network analyzer", "HP8753", "calibration kit", "XKT", "HPGL", "Smith chart"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Electronic Design Automation (EDA)",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vnakit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
