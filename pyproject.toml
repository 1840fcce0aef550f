[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "asciimotion"
version = "0.1.0"
description = "Turn images, animated GIF/WebP files and videos into coloured text art, and play them in a terminal"
requires-python = ">=3.10"
keywords = ["ascii", "ascii-art", "image", "video", "gif", "webp", "text", "terminal"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Multimedia :: Video :: Display",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
asciimotion = "asciimotion.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["asciimotion"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
