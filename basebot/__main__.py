"""Entry point for running the demos as a module: python -m basebot"""

import sys

from basebot.app import main

if __name__ == "__main__":
    sys.exit(main())
