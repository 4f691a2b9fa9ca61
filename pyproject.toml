[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bsdcompat"
version = "0.1.0"
description = "BSD libc utility functions: bounded string copies, vis/unvis encoding, symbolic modes, radix sort, pid files and more"
requires-python = ">=3.10"
dependencies = []
keywords = ["bsd", "strlcpy", "vis", "unvis", "strmode", "setmode", "strtonum", "radixsort", "pidfile", "chacha"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bsdcompat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
