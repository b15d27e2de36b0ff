[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rsdkcore"
version = "1.3.2"
description = "Core data handling for a retro 2D game engine: INI configs, packed data files, palettes, trig tables, input state and mods."
requires-python = ">=3.10"
dependencies = []
keywords = ["game-engine", "retro", "ini", "palette", "data-pack", "mods"]
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
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rsdkcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
