"""boilersim CLI - Main entry point."""
from .main import app, main

__all__ = ["app", "main"]
