"""Command implementations for the doublekit CLI."""
