"""Multi-provider AI call router for interview preparation."""

__version__ = "0.1.0"
