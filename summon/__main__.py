"""Module entrypoint for ``python -m summon``.

All argument parsing and command dispatch happen in ``summon.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
