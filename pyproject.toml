[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sysprogkit"
version = "0.1.0"
description = "Small systems-programming tools: a C comment stripper, a directory tree lister and a simulated heap manager"
requires-python = ">=3.10"
dependencies = []
keywords = ["comments", "decomment", "directory-tree", "filesystem", "malloc", "heap", "allocator"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
decomment = "sysprogkit.decomment:main"
decomment-dfa = "sysprogkit.decomment_dfa:main"
dirtree = "sysprogkit.dirtree:main"

[tool.hatch.build.targets.wheel]
packages = ["sysprogkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
