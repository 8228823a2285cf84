[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ptkit"
version = "0.1.0"
description = "Protocol toolkit core: typed endian-aware byte buffers, error codes, interrupt handling and threading helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["protocol", "binary", "serialization", "buffer", "endianness", "threading"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ptkit"]

[tool.pytest.ini_options]
addopts = "-ra"
