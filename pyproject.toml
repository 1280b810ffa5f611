[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "medit"
version = "2.10.0"
description = "Building blocks of a small Emacs-style text editor: line store, kill buffer, file reading and writing with backups, init files, key tables, key decoding and keyboard macros."
requires-python = ">=3.10"
dependencies = []
keywords = ["editor", "emacs", "text", "keyboard-macros", "key-bindings"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["medit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
