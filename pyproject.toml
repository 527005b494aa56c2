[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "recursia"
version = "0.1.0"
description = "Recursive generators for mountain ranges, temples and a constructed language, with a small console test harness"
requires-python = ">=3.10"
dependencies = []
keywords = ["recursion", "fractal", "midpoint displacement", "teaching", "testing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Environment :: Console",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
recursia-tests = "recursia.console:main"

[tool.hatch.build.targets.wheel]
packages = ["recursia"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
