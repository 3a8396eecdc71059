[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "acoustolev"
version = "0.1.0"
description = "Acoustic levitation helpers: transducer field propagation, Gor'kov forces, field plots, board calibration files and board messages"
requires-python = ">=3.10"
keywords = ["acoustics", "levitation", "phased array", "gorkov", "ultrasound", "transducers"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "numpy",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["acoustolev"]

[tool.pytest.ini_options]
addopts = "-ra"
