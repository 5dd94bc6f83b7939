[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "baudoedit"
version = "0.1.0"
description = "A small interactive 3D scene editor for placing, rotating and scaling model instances stored in BEM files"
requires-python = ">=3.10"
keywords = ["3d", "editor", "opengl", "scene", "model", "pyglet"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]
dependencies = [
    "numpy",
    "pyglet",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
baudoedit = "baudoedit.app:main"

[tool.hatch.build.targets.wheel]
packages = ["baudoedit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
