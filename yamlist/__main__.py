"""Module entrypoint for ``python -m yamlist``."""

from .cli import main


if __name__ == "__main__":
    main()
