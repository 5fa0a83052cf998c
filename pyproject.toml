[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zaplog"
version = "0.1.0"
description = "Structured logging building blocks: typed fields, array and error fields, pooled byte buffers and an encoder registry."
requires-python = ">=3.10"
dependencies = []
keywords = ["logging", "structured-logging", "fields", "encoder", "buffer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
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
packages = ["zaplog"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
