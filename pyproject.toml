[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "termchat"
version = "0.1.0"
description = "Terminal chat client for xAI, Claude and OpenAI models with a curses interface"
requires-python = ">=3.10"
keywords = ["chat", "chatbot", "terminal", "curses", "llm", "openai", "claude", "xai"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
]
dependencies = [
    "requests",
    "wcwidth",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
termchat = "termchat.app:main"

[tool.hatch.build.targets.wheel]
packages = ["termchat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
