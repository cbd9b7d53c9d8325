"""
Passguard Module Entry Point
=============================

Allows running the Passguard CLI via: python -m passguard
"""

from passguard.cli import main

if __name__ == "__main__":
    main()
