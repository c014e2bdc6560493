[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "msgwire"
version = "0.1.0"
description = "Low-level MessagePack wire format primitives: markers, readers, writers and message length measurement"
requires-python = ">=3.10"
dependencies = []
keywords = ["msgpack", "messagepack", "serialization", "binary", "wire-format"]
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
    "Topic :: File Formats",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["msgwire"]

[tool.pytest.ini_options]
addopts = "-ra"
