[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tinyhttpd"
version = "0.1.0"
description = "A small HTTP/1.0 server with static files, CGI programs and a request log, plus a minimal client"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "server", "cgi", "client", "web"]
classifiers = [
    "Development Status :: 3 - Alpha",
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
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tinyhttpd = "tinyhttpd.server:main"
tinyhttpd-client = "tinyhttpd.client:main"
tinyhttpd-spin = "tinyhttpd.output:main"

[tool.hatch.build.targets.wheel]
packages = ["tinyhttpd"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
