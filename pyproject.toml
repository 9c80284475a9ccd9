[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minxp"
version = "0.1.7"
description = "Standard-library style Windows-style paths, environment access, files, directories, console output and threads."
requires-python = ">=3.10"
dependencies = []
keywords = ["paths", "windows", "filesystem", "environment", "threads", "io"]
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
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["minxp"]

[tool.pytest.ini_options]
addopts = "-ra"
