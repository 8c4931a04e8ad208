"""Entry point for `python -m svcinstall`."""

from svcinstall.cli.app import app

if __name__ == "__main__":
    app()
