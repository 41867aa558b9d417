"""Allow ``python -m sheet_export``."""

import sys

from sheet_export.cli import main

if __name__ == "__main__":
    sys.exit(main())
