[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "timelinegen"
version = "0.1.0"
description = "Generate goal-driven study and achievement timelines with an AI chat model and store them in MySQL."
requires-python = ">=3.10"
dependencies = [
    "httpx",
    "pymysql",
]
keywords = ["timeline", "planning", "goals", "scheduling", "openai", "mysql"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
timelinegen-seed = "timelinegen.seed:main"

[tool.hatch.build.targets.wheel]
packages = ["timelinegen"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
