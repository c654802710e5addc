[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mavplan"
version = "0.1.0"
description = "Planning utilities for micro aerial vehicles: yaw policies, particle-based intermediate goals, goal selection, path resampling and benchmark bookkeeping."
requires-python = ">=3.10"
keywords = ["mav", "planning", "trajectory", "esdf", "tsdf", "yaw", "benchmark", "robotics"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["mavplan"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
