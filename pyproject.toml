[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "examtools"
version = "0.1.0"
description = "Small file, list, cipher and socket utilities: file metadata, a flight register, TEA encryption, a toy EWP mail server and a key brute-forcer"
requires-python = ">=3.10"
dependencies = []
keywords = ["djb2", "tea", "tiny-encryption-algorithm", "metadata", "smtp", "brute-force", "flights"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
examtools-metadata = "examtools.metadata:main"
examtools-flights = "examtools.flights_cli:main"
examtools-encrypt = "examtools.encryptor:main"
examtools-ewp-server = "examtools.ewp_server:main"
examtools-bruteforce = "examtools.bruteforce:main"

[tool.hatch.build.targets.wheel]
packages = ["examtools"]

[tool.hatch.build.targets.sdist]
include = ["examtools", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
