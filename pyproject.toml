[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bfscore"
version = "2.4.1"
description = "Building blocks for a file finder: a compressed trie, timestamp parsing, multi-flavour regexes and a keyboard-aware typo distance"
requires-python = ">=3.10"
dependencies = []
keywords = ["find", "filesystem", "trie", "timestamp", "timegm", "regex", "typo", "levenshtein"]
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
    "Topic :: System :: Filesystems",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bfscore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
