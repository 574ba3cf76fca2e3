[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rosgeneric"
version = "0.15.0"
description = "Generic ROS-style pub/sub and service interfaces, an in-memory mock backend, and Jinja2 helpers for generating code from message specifications."
requires-python = ">=3.10"
keywords = ["ROS", "robotics", "pubsub", "mock", "codegen", "jinja2"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Framework :: AsyncIO",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Software Development :: Testing :: Mocking",
    "Topic :: Software Development :: Code Generators",
]
dependencies = [
    "jinja2",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["rosgeneric"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
