"""Module entrypoint for ``python -m splitdiff``.

All argument parsing and rendering happen in ``splitdiff.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
