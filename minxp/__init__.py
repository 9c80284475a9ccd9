"""Standard-library style paths, environment, files, console output, process exit and threads."""

__version__ = "0.1.7"