[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "monkeylang"
version = "0.1.0"
description = "A tree-walking interpreter and interactive shell for the Monkey programming language"
requires-python = ">=3.10"
dependencies = []
keywords = ["interpreter", "monkey", "programming-language", "repl", "parser", "lexer"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
monkey = "monkeylang.repl:main"

[tool.hatch.build.targets.wheel]
packages = ["monkeylang"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
