[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "asciigenetic"
version = "0.1.0"
description = "Evolve ASCII art that matches an image with a genetic algorithm"
requires-python = ">=3.10"
dependencies = [
    "pillow",
    "numpy",
]
keywords = ["ascii-art", "genetic-algorithm", "image", "evolution", "terminal"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Artistic Software",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
asciigen = "asciigenetic.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["asciigenetic"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
