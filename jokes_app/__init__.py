"""Jokes App"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("jokes-app")
except PackageNotFoundError:
    __version__ = "dev"
