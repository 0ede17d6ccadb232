"""epicat - file-based epic and story tracking in the terminal."""

from epicat._version import version as __version__

__all__ = ["__version__"]
