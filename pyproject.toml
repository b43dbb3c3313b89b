[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sysdyn"
version = "0.1.0"
description = "Parse and simulate system dynamics models: stocks, flows, auxiliaries and modules."
requires-python = ">=3.10"
dependencies = []
keywords = ["system dynamics", "simulation", "stock and flow", "modelling", "euler"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sysdyn"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
