#!/usr/bin/env python3
"""
Entry point script for the contextpack CLI.
"""

import sys

from contextpack.main import main

if __name__ == "__main__":
    sys.exit(main())
