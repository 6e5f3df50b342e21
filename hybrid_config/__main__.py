"""
Entry point for the hybrid config CLI.

Run with: python -m hybrid_config
Or: hybrid-config (if installed as package)
"""

import sys

from hybrid_config.cli import main

if __name__ == "__main__":
    sys.exit(main())
