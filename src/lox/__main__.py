#!/usr/bin/env python3
"""Run the Lox command-line interface with `python -m lox`."""

import sys

import lox.cli


if __name__ == "__main__":
    sys.exit(lox.cli.main())
