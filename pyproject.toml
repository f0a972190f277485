[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pinkdrift"
version = "0.1.0"
description = "A small 3D drift racing game: one timed lap around a rectangular circuit, with drift scoring, skid marks and a day/night mode."
requires-python = ">=3.10"
dependencies = [
    "pyglet",
]
keywords = ["game", "racing", "drift", "opengl", "pyglet"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: MacOS X",
    "Environment :: Win32 (MS Windows)",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
pinkdrift = "pinkdrift.app:main"

[tool.hatch.build.targets.wheel]
packages = ["pinkdrift"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
