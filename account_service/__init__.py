"""User-account service: registration, login, and profile management."""

__version__ = "0.1.0"
