[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "odds"
version = "0.1.3"
description = "A smarter cd. You know where you want to go. Now your shell does too."
requires-python = ">=3.10"
dependencies = []
keywords = ["cd", "navigation", "shell", "filesystem", "jump", "frecency"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
odds = "odds.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["odds"]

[tool.pytest.ini_options]
addopts = "-ra"
