[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "histocluster"
version = "0.1.0"
description = "k-means clustering of histograms with k-means++ seeding, earth mover's and Euclidean distances, and triangle-inequality pruning"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "k-means",
    "clustering",
    "histogram",
    "earth-movers-distance",
    "kmeans++",
    "triangle-inequality",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Information Analysis",
]

[project.optional-dependencies]
test = [
    "pytest",
    "numpy",
]

[tool.hatch.build.targets.wheel]
packages = ["histocluster"]

[tool.pytest.ini_options]
testpaths = ["tests"]
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
