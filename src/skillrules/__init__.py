"""skillrules - skill activation hooks for AI coding assistants."""

__version__ = "0.1.0"
