#!/usr/bin/env python3
"""Run maintenance commands from a source checkout; see urbanliving.manage."""

import sys

from urbanliving.manage import main

if __name__ == "__main__":
    sys.exit(main())
