"""
Entry point for running rustkit CLI as a module.

Usage: python -m rustkit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
