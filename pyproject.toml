[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "thresholdkit"
version = "0.1.0"
description = "Threshold BLS signatures, ECIES with recovery packages, and a distributed key generation protocol"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = ["threshold", "bls", "dkg", "ecies", "secret-sharing", "pairing"]
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
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
encode-cli = "thresholdkit.encode_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["thresholdkit"]

[tool.pytest.ini_options]
addopts = "-ra"
