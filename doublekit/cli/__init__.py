"""
doublekit CLI module.

This module provides the command-line interface for doublekit.
"""

from .parser import CLI, main

__all__ = ["CLI", "main"]
