#!/usr/bin/env python3
"""
Dhaka Bank Console Entry Point

Starts an interactive session against the configured accounts file.
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from dhaka_bank.__main__ import main


if __name__ == "__main__":
    main()
