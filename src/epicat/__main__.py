"""Allow running epicat with ``python -m epicat``."""

from epicat.cli import main

if __name__ == "__main__":
    main()
