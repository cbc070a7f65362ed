"""
Entry point for running doublekit CLI as a module.

Usage: python -m doublekit [command] [options]
"""

from doublekit.cli.parser import main

if __name__ == "__main__":
    main()
