"""Entry point for running mediamatch as a module.

Allows running with: python -m mediamatch
"""

from mediamatch.cli import app

if __name__ == "__main__":
    app()
