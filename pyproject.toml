[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hoyradio"
version = "0.1.0"
description = "Protocol helpers for Hoymiles micro-inverters on nRF24 radios: CRCs, request packets, payload reassembly, captured-frame decoding and clock helpers."
requires-python = ">=3.10"
dependencies = []
keywords = ["hoymiles", "nrf24", "inverter", "crc", "solar", "protocol", "ntp"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
hoyradio-sniff = "hoyradio.sniff:main"

[tool.hatch.build.targets.wheel]
packages = ["hoyradio"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
