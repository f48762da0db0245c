"""Main entry point for the shelfkeeper package."""

from shelfkeeper.cli import app


def main():
    """Run the command-line interface."""
    app(prog_name="shelfkeeper")


if __name__ == "__main__":
    main()
