[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "modelhttp"
version = "0.1.0"
description = "A small threaded HTTP/1.0 file server with CGI support, plus a lexer and syntax tree for a small typed scripting language"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "server", "cgi", "interpreter", "static-files"]
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
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
modelhttp-server = "modelhttp.server:main"

[tool.hatch.build.targets.wheel]
packages = ["modelhttp"]

[tool.pytest.ini_options]
addopts = "-ra"
