[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "btcwire"
version = "0.1.0"
description = "Encoding and decoding of Bitcoin peer-to-peer wire messages"
requires-python = ">=3.10"
dependencies = []
keywords = ["bitcoin", "p2p", "protocol", "wire", "serialization", "testnet"]
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
    "Topic :: Office/Business :: Financial",
    "Topic :: Internet",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["btcwire"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
