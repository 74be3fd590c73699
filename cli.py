#!/usr/bin/env python3
"""
DaVinci User Admin CLI.

Usage:
    python cli.py            # Authenticate and start the menu
    python cli.py --verbose  # INFO level logging
    python cli.py --debug    # DEBUG level logging
"""

import sys
from pathlib import Path

# Add project root to path for absolute imports
PROJECT_ROOT = Path(__file__).resolve().parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from davinci_cli.main import app

if __name__ == "__main__":
    app()
