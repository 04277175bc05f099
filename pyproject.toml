[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spaceshooter"
version = "1.0.0"
description = "A vertical space shooter arcade game with asteroids, enemy ships, levels and a leaderboard"
requires-python = ">=3.10"
keywords = ["game", "arcade", "shooter", "pygame", "asteroids"]
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
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "pygame",
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
spaceshooter = "spaceshooter.app:main"
spaceshooter-demo = "spaceshooter.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["spaceshooter"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
