[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "simfs"
version = "0.1.0"
description = "An interactive in-memory simulated file system with binary-search-tree directories and a contiguous-block disk"
requires-python = ">=3.10"
dependencies = []
keywords = ["filesystem", "simulation", "shell", "education", "disk allocation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
simfs = "simfs.shell:main"

[tool.hatch.build.targets.wheel]
packages = ["simfs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
