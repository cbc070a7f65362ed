"""
Entry point for running doublekit CLI as a module.

Usage: python -m doublekit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
