"""Allow ``python -m pi.edit``."""

from pi.edit.cli import main

if __name__ == "__main__":
    main()
