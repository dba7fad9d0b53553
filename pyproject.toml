[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "geminiclient"
version = "0.1.0"
description = "Building blocks for an openGemini time-series client: columnar records, binary encoding, decompression pools and client configuration."
requires-python = ">=3.10"
keywords = ["time-series", "database", "client", "columnar", "record", "zstd", "gzip"]
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
    "Topic :: Database :: Front-Ends",
]
dependencies = [
    "zstandard",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["geminiclient"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
