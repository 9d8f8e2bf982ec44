"""cmdloop CLI entry point."""

from cmdloop.cli.app import app

if __name__ == "__main__":
    app()
