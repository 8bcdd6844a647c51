"""Allow ``python -m htmlpdf``."""

from htmlpdf.ui.cli import main


if __name__ == "__main__":
    main()
