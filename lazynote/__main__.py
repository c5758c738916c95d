"""Module entrypoint for ``python -m lazynote``.

Argument parsing and runtime setup happen in ``lazynote.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
