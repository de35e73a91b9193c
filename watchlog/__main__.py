"""Entry point for ``python -m watchlog``.

Usage:
    python -m watchlog [options] LOG
"""

from watchlog.cli import main

if __name__ == "__main__":
    main()
