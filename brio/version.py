"""Version information for Brio.

Reads the version from the installed package metadata (pyproject.toml).
"""

from importlib.metadata import version

__version__ = version("brio")
