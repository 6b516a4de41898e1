"""Allow ``python -m pyzbase32``."""

from .cli import main

if __name__ == "__main__":
    main()
