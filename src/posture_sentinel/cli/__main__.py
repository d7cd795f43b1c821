"""
Allow running posturectl as a module: python -m posture_sentinel.cli
"""

import sys
from .posturectl import main

if __name__ == "__main__":
    sys.exit(main())
