[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cweb"
version = "0.1.0"
description = "A small multi-threaded static HTML web server with a companion HTTP stress-testing client"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "web server", "static files", "stress testing", "load testing"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Software Development :: Testing :: Traffic Generation",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cweb = "cweb.app:main"
cweb-stress = "cweb.stress_app:main"

[tool.hatch.build.targets.wheel]
packages = ["cweb"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
