[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coreum"
version = "0.1.0"
description = "Fee model, deterministic gas, custom parameters and NFT asset logic for a chain application"
requires-python = ">=3.10"
dependencies = []
keywords = ["blockchain", "fee-model", "gas", "nft", "bech32"]
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
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["coreum"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
