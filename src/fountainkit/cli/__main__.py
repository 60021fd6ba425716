"""Run the fountainkit CLI with ``python -m fountainkit.cli``."""

from fountainkit.cli.main import main

if __name__ == "__main__":  # pragma: no cover
    main()
