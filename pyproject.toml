[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "modedhr"
version = "0.1.0"
description = "HR and student-recruitment records for an education system: staff and student HR details, leave, resignation and raise requests, departments and admission criteria, stored in SQLite."
requires-python = ">=3.10"
dependencies = []
keywords = ["education", "hr", "recruitment", "admission", "leave-requests", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["modedhr"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
