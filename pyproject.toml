[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gptkit"
version = "0.1.0"
description = "Request and response models, request building and event-stream reading for a GPT-style HTTP API"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "gpt",
    "api",
    "assistants",
    "threads",
    "runs",
    "json-schema",
    "server-sent-events",
    "multipart",
]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gptkit"]

[tool.hatch.build.targets.sdist]
include = ["gptkit", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
