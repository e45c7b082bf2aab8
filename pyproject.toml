[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "taskboard"
version = "0.1.0"
description = "A small REST service for managing tasks with tags, filtering and sorting, backed by SQLite."
requires-python = ">=3.10"
keywords = ["tasks", "todo", "rest", "api", "sqlite", "flask"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "flask",
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
taskboard = "taskboard.main:main"

[tool.hatch.build.targets.wheel]
packages = ["taskboard"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
