[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mdhtml"
version = "0.1.0"
description = "A small Markdown to HTML converter built from a lexer, a tree parser and a renderer"
requires-python = ">=3.10"
dependencies = []
keywords = ["markdown", "html", "lexer", "parser", "converter"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Markup :: Markdown",
    "Topic :: Text Processing :: Markup :: HTML",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mdhtml = "mdhtml.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["mdhtml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
