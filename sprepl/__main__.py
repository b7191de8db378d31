"""Allow ``python -m sprepl``."""

from sprepl.cli import cli

if __name__ == "__main__":
    cli()
