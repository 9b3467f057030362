[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "schemadao"
version = "0.1.0"
description = "Describe relational tables once and get PostgreSQL DDL plus lightweight record classes for them"
requires-python = ">=3.10"
dependencies = []
keywords = ["sql", "postgresql", "schema", "ddl", "dao", "orm"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Framework :: AsyncIO",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
schemadao = "schemadao.app:main"

[tool.hatch.build.targets.wheel]
packages = ["schemadao"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
