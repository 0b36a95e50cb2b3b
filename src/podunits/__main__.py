"""Entry point for ``python -m podunits``."""

from podunits.cli.main import main


if __name__ == "__main__":
    main()
