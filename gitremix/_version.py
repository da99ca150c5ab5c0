"""Version information for git-remix."""

__version__ = "1.0.0"
