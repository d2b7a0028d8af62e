[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "midirunconf"
version = "0.1.2"
description = "Edit midirun MIDI-to-keystroke mappings, watch MIDI input and capture key codes"
requires-python = ">=3.11"
dependencies = [
    "mido",
    "tomli-w",
]
keywords = ["midi", "midirun", "keyboard", "mapping", "toml", "evdev"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: MIDI",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
midirun-config = "midirunconf.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["midirunconf"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
