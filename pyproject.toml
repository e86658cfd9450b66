[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cornellpath"
version = "0.1.0"
description = "A small physically based path tracer with next-event estimation, MIS and a Disney-style BRDF that renders a Cornell box to PNG."
requires-python = ">=3.10"
dependencies = []
keywords = ["path tracing", "ray tracing", "rendering", "brdf", "cornell box", "monte carlo"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cornellpath = "cornellpath.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cornellpath"]

[tool.pytest.ini_options]
addopts = "-ra"
