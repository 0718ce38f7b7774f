"""Module entrypoint for ``python -m cscopejump``."""

from .cli import main

if __name__ == "__main__":
    main()
