[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lampos"
version = "0.1.0"
description = "Control logic for a touch, Bluetooth and infrared driven LED lamp: modes, animations, palettes and filters"
requires-python = ">=3.10"
dependencies = []
keywords = ["led", "lamp", "animation", "easing", "palette", "bluetooth", "touch", "filters"]
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
    "Topic :: Home Automation",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lampos"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
