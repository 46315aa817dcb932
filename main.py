#!/usr/bin/env python3
"""
safescript - defensive script example

Thin wrapper around safescript.cli; main() only runs when this file is
executed, not when it is imported.

To run: python main.py [values...]
"""
import sys

from safescript.cli import main

if __name__ == "__main__":
    sys.exit(main(script_path=__file__))
