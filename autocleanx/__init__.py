"""AutoCleanX: column type inference, cleaning and feature synthesis for tabular files."""

__version__ = "1.0.0"
