[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "keyshow"
version = "1.2.0"
description = "Show keystrokes as they are typed, captured globally from Linux input devices"
requires-python = ">=3.10"
dependencies = []
keywords = ["keystrokes", "screencast", "evdev", "input", "overlay"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[project.scripts]
keyshow = "keyshow.app:main"

[tool.hatch.build.targets.wheel]
packages = ["keyshow"]

[tool.pytest.ini_options]
addopts = "-ra"
