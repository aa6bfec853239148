"""Allow ``python -m aikeedo_installer``."""

import sys

from aikeedo_installer.ui.cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
