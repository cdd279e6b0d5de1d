"""numinv CLI - Command-line interface for telephone number inventory servers."""

__version__ = "1.0.0"
