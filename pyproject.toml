[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "proki"
version = "0.1.0"
description = "A terminal process monitor showing per-process CPU and memory usage"
requires-python = ">=3.10"
dependencies = [
    "psutil",
]
keywords = ["process", "monitor", "top", "cpu", "memory", "procfs", "curses"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
proki = "proki.app:main"

[tool.hatch.build.targets.wheel]
packages = ["proki"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
