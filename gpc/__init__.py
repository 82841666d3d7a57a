"""gpc - create new projects from git, directory or archive templates."""

__version__ = "0.3.0"
