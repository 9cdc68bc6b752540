[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nostrgit"
version = "0.4.0"
description = "Git patch parsing, patch series events, replies, configuration updates and repository state for code collaboration over Nostr"
requires-python = ">=3.10"
keywords = ["nostr", "nip-34", "git", "patch", "format-patch"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control :: Git",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nostrgit"]

[tool.pytest.ini_options]
addopts = "-ra"
