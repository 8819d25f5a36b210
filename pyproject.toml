[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minisuite"
version = "0.1.0"
description = "A small in-memory key-value server and client, a TF-IDF search engine and a concurrent web crawler"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "redis",
    "resp",
    "key-value",
    "search-engine",
    "tf-idf",
    "inverted-index",
    "web-crawler",
    "thread-pool",
]
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
    "Topic :: Software Development :: Libraries",
    "Topic :: Database :: Database Engines/Servers",
    "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
minisuite-crawl = "minisuite.crawl_cli:main"
minisuite-search = "minisuite.search_cli:main"
minisuite-server = "minisuite.server_cli:main"
minisuite-client = "minisuite.client_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["minisuite"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
