"""Allow ``python -m blart``."""

import sys

from blart.cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
