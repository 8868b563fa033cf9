[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "klcore"
version = "0.1.0"
description = "Small utilities: string hashes, read-only file views and type-directed JSON conversion"
requires-python = ">=3.10"
dependencies = []
keywords = ["hash", "fnv1a", "hsieh", "json", "serialization", "dataclasses", "mmap"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["klcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
