[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sctools"
version = "2.0.0"
description = "Small building blocks: open-addressing hash map, ring queue, option matcher, memory-mapped files and a mutex"
requires-python = ">=3.10"
dependencies = []
keywords = ["hashmap", "murmurhash", "queue", "deque", "mmap", "mutex", "options", "data-structures"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sctools"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
