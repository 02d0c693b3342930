"""
Hamachi CLI entry point.

Usage:
    python -m hamachi [OPTIONS] COMMAND [ARGS]...
"""

from .cli import app

if __name__ == "__main__":
    app(prog_name="hamachi")
