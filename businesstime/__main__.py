"""
Convenience entry point for running businesstime directly.

Usage: python -m businesstime [command] [options]
"""

from .cli.app import app

if __name__ == "__main__":
    app()
