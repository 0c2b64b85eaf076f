[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "echoping"
version = "0.1.0"
description = "Send ICMP echo requests to hosts and report round-trip times"
requires-python = ">=3.10"
dependencies = []
keywords = ["ping", "icmp", "echo", "network", "latency", "monitoring"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
echoping = "echoping.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["echoping"]

[tool.pytest.ini_options]
addopts = "-ra"
