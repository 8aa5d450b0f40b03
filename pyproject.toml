[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "duckpond"
version = "0.1.0"
description = "A rubber duck following random B-spline paths across a rippling water surface inside a skybox"
requires-python = ">=3.10"
keywords = ["opengl", "water", "simulation", "b-spline", "skybox", "pyglet"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
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
duckpond = "duckpond.app:main"

[tool.hatch.build.targets.wheel]
packages = ["duckpond"]

[tool.pytest.ini_options]
addopts = "-ra"
