[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "caelis"
version = "0.1.0"
description = "Lexer and parser for the Caelis functional language"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "parser", "lexer", "language", "functional"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
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

[project.scripts]
caelis = "caelis.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["caelis"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
