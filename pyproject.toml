[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "athread"
version = "0.1.0"
description = "A thread pool with core and seasonal workers, idle timeouts and an optional start signal"
requires-python = ">=3.10"
dependencies = []
keywords = ["thread", "threadpool", "worker", "concurrency", "tasks"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
athread-samples = "athread.samples:main"

[tool.hatch.build.targets.wheel]
packages = ["athread"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
