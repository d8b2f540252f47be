"""Breezy Weather API App"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("breezy-weather")
except PackageNotFoundError:
    __version__ = "dev"
