[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lvjb"
version = "0.1.0"
description = "A fast, minimal build and test tool for Java projects"
requires-python = ">=3.11"
dependencies = [
    "tomli-w",
]
keywords = ["java", "build", "javac", "jar", "incremental"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Java",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
lvjb = "lvjb.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["lvjb"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
