#!/usr/bin/env python3
"""
Retail Bank Ledger Entry Point

Starts the interactive transaction manager on standard input.
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from retail_bank.transaction_manager import main


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nTransaction Manager is terminated.")
