"""Entry point for ``python -m pmavhost``."""

from pmavhost.cli.main import main


if __name__ == "__main__":
    main()
