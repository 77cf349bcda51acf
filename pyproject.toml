[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "colavision"
version = "0.1.0"
description = "CoLa command protocol client for 3D time-of-flight cameras, with device configuration and point-cloud geometry helpers"
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "scipy",
]
keywords = ["cola", "cola2", "colab", "sensor", "point cloud", "protocol", "time-of-flight"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["colavision"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
