[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vartree"
version = "0.1.0"
description = "A typed, observable tree of named variables with XML persistence"
requires-python = ">=3.10"
dependencies = []
keywords = ["variables", "parameters", "tree", "xml", "configuration", "settings"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vartree"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
