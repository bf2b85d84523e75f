"""quillpen: a command-line writing assistant."""

__version__ = "0.1.0"
