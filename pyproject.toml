[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "elevador"
version = "0.1.0"
description = "Event-driven controller for a three-floor elevator, driven over UDP"
requires-python = ">=3.10"
dependencies = []
keywords = ["elevator", "state machine", "udp", "controller", "simulation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
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

[project.scripts]
elevador = "elevador.app:main"

[tool.hatch.build.targets.wheel]
packages = ["elevador"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
