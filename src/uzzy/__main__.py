"""Module entrypoint for `python -m uzzy`."""

from uzzy.cli import run

if __name__ == "__main__":
    raise SystemExit(run())
