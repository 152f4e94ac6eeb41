"""ABC (Assignment, Branch, Condition) complexity metrics for source files."""

__version__ = "0.1.0"
