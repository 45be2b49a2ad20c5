[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "quadgen"
version = "0.1.0"
description = "Quadruple intermediate code and scoped symbol tables for small compilers"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "quadruples", "intermediate-code", "symbol-table", "three-address-code"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["quadgen"]

[tool.pytest.ini_options]
addopts = "-ra"
