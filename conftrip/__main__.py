"""
Package entry point.

Allows running the application via:

    python -m conftrip

This simply forwards execution to conftrip.cli.main().
"""

from conftrip.cli import main

if __name__ == "__main__":
    main()
