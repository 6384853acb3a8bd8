[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "toba"
version = "1.2.1"
description = "Command-line helper for local WordPress projects: shared global configuration, project settings and a step pipeline"
requires-python = ">=3.10"
dependencies = []
keywords = ["wordpress", "lando", "configuration", "cli", "pipeline"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
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

[project.scripts]
toba = "toba.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["toba"]

[tool.pytest.ini_options]
addopts = "-ra"
