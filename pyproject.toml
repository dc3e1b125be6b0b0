[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jobhttpd"
version = "0.1.0"
description = "A small HTTP/1.0 server with utility endpoints and a prioritised background job system"
requires-python = ">=3.10"
dependencies = [
    "python-dotenv",
]
keywords = [
    "http",
    "http-server",
    "job-queue",
    "worker-pool",
    "rate-limiting",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: No Input/Output (Daemon)",
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

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
jobhttpd = "jobhttpd.app:main"

[tool.hatch.build.targets.wheel]
packages = ["jobhttpd"]

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
