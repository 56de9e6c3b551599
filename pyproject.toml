[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "swissdraw"
version = "0.1.0"
description = "Swiss-draw tournament pairing with margin-based team ratings and SQLite storage"
requires-python = ">=3.10"
keywords = [
    "swiss",
    "tournament",
    "pairing",
    "draw",
    "rating",
    "sports",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "numpy",
    "scipy",
    "platformdirs",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
swissdraw = "swissdraw.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["swissdraw"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
