[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "unifiedlogs"
version = "0.5.1"
description = "Parsers for macOS Unified Log files: tracev3 headers, timesync data and printf-style message formatting"
requires-python = ">=3.10"
dependencies = []
keywords = ["forensics", "macOS", "unifiedlog", "tracev3", "timesync", "logarchive"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Information Technology",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["unifiedlogs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
