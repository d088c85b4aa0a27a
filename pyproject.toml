[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bytebraise"
version = "0.1.0"
description = "Lossless syntax trees, a token-driven parser and tree editing helpers for BitBake metadata"
requires-python = ">=3.10"
dependencies = []
keywords = ["bitbake", "yocto", "openembedded", "parser", "syntax-tree", "metadata"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bytebraise"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
