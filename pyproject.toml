[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "campuslife"
version = "1.0.0"
description = "A campus life assistant: accounts, a weekly course timetable, a task list with deadlines and a shared message board"
requires-python = ">=3.10"
dependencies = []
keywords = ["campus", "timetable", "tasks", "todo", "message board", "students"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Education",
    "Natural Language :: Chinese (Simplified)",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
campuslife = "campuslife.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["campuslife"]

[tool.hatch.build.targets.sdist]
include = ["campuslife", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
