"""Module entrypoint for `python -m modcheck`."""

from modcheck.cli import run

if __name__ == "__main__":
    run()
