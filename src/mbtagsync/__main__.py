"""Allow ``python -m mbtagsync``."""

import sys

from mbtagsync.ui.cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
