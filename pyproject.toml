[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "assoofs"
version = "0.1.0"
description = "Formatter and reader/writer for ASSOOFS, a tiny block-based filesystem image format"
requires-python = ">=3.10"
dependencies = []
keywords = ["filesystem", "image", "mkfs", "block device", "assoofs"]
classifiers = [
    "Development Status :: 3 - Alpha",
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
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mkassoofs = "assoofs.mkfs:main"

[tool.hatch.build.targets.wheel]
packages = ["assoofs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
