"""Allow ``python -m audit_toolkit``."""

import sys

from audit_toolkit.cli import main

if __name__ == "__main__":
    sys.exit(main())
