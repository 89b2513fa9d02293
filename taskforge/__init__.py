"""TaskForge: a personal task tracker with a CLI and a tkinter GUI."""

__version__ = "2.0.0"
