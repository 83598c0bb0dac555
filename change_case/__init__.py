"""Change Case: convert clipboard or selected text between casing conventions."""

__version__ = "0.1.0"
