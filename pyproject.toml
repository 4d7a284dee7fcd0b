[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mltt"
version = "0.1.0"
description = "Source spans, a file database and a lexer for the MLTT language"
requires-python = ">=3.10"
keywords = ["lexer", "tokenizer", "type theory", "spans", "compiler"]
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
]
dependencies = [
    "regex",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["mltt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
