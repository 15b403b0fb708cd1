[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cozekit"
version = "0.1.0"
description = "Synchronous client for the Coze open API: users, templates, variables, workflow runs and run histories, with streamed workflow events."
requires-python = ">=3.10"
dependencies = [
    "httpx",
]
keywords = ["coze", "api", "client", "workflow", "streaming", "sse"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["cozekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
