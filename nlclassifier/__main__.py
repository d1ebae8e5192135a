import sys

from nlclassifier.cli import main

if __name__ == "__main__":  # pragma: no cover – CLI only
    sys.exit(main())
