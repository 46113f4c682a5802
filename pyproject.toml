[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "covibe"
version = "0.1.0"
description = "Source spans, source maps, string interning and diagnostics for the CoVibe compiler front end"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "diagnostics", "spans", "interner", "source-map"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["covibe"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
