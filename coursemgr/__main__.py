"""
Package entry point.

Allows running the application via:

    python -m coursemgr

This simply forwards execution to coursemgr.cli.main().
"""

from coursemgr.cli import main

if __name__ == "__main__":
    main()
