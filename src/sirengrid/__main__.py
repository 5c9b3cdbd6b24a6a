"""Main entry point for sirengrid."""

from sirengrid.cli import cli

if __name__ == "__main__":
    cli()
