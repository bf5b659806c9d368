[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "symbolnet"
version = "0.1.0"
description = "Draw symbols on an 8x8 pixel grid, train a small neural network on them and recognise new drawings."
requires-python = ">=3.10"
dependencies = [
    "matplotlib",
]
keywords = ["neural-network", "symbol-recognition", "perceptron", "pixel-grid", "classification"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Recognition",
    "Topic :: Education",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
symbolnet = "symbolnet.app:main"

[tool.hatch.build.targets.wheel]
packages = ["symbolnet"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
