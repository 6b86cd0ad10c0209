#!/usr/bin/env python3
"""
Script de compression CSS
Équivalent de la commande css-compressor, utilisable sans installation
"""

import sys

from css_compressor.cli import main

if __name__ == "__main__":
    sys.exit(main())
