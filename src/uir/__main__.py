"""Allow running uir as ``python -m uir``."""

from uir.cli import main

if __name__ == "__main__":
    main()
