[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "medleytext"
version = "0.1.0"
description = "Editing core for a markdown-first text editor: buffer editing, find/replace, markdown autocomplete and fuzzy file finding"
requires-python = ">=3.10"
dependencies = []
keywords = ["markdown", "editor", "text", "fuzzy-finder", "autocomplete", "find-replace"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors",
    "Topic :: Text Processing :: Markup :: Markdown",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["medleytext"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
