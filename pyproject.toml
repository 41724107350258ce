[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pixelrunner"
version = "0.1.0"
description = "Frame timers and sprite animation for a side-scrolling game, plus compiler and platform identification from predefined macros"
requires-python = ">=3.10"
keywords = ["game", "side-scroller", "animation", "timer", "compiler", "preprocessor"]
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
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
    "Topic :: Software Development :: Build Tools",
]
dependencies = []

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["pixelrunner"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
