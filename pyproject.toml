[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flaschenorgel"
version = "1.0.0"
description = "Turn pressure readings from a bottle organ into MIDI notes"
requires-python = ">=3.10"
dependencies = []
keywords = ["midi", "bottle organ", "sensor", "pressure", "music"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: MIDI",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
flaschenorgel = "flaschenorgel.processor:main"

[tool.hatch.build.targets.wheel]
packages = ["flaschenorgel"]

[tool.pytest.ini_options]
addopts = "-ra"
