"""
Package entry point.

Allows running the application via:

    python -m loiwatch

This simply forwards execution to loiwatch.cli.main().
"""

from loiwatch.cli import main

if __name__ == "__main__":
    main()
