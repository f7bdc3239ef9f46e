"""
Module entrypoint for the toy shop CLI.

This file exists so that `python -m toyshop ...` works consistently in all
environments, including when the console-script wrapper is not installed.
"""

from __future__ import annotations

from toyshop.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
