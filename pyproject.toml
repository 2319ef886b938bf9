[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dreampop"
version = "0.1.0"
description = "Your note list, but in the terminal: notes grouped into spaces, with a history of checked notes"
requires-python = ">=3.10"
dependencies = [
    "platformdirs",
]
keywords = ["notes", "todo", "terminal", "cli", "spaces"]
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
    "Topic :: Office/Business :: News/Diary",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
dreampop = "dreampop.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["dreampop"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
