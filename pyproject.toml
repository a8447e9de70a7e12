[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fastgo"
version = "0.1.0"
description = "A lightweight HTTP API server with health checks, request IDs, CORS and MySQL settings"
requires-python = ">=3.10"
keywords = ["http", "api", "server", "flask", "mysql", "request-id", "cors"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "flask",
    "werkzeug",
    "pyyaml",
    "sqlalchemy",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
fg-apiserver = "fastgo.app:main"

[tool.hatch.build.targets.wheel]
packages = ["fastgo"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
