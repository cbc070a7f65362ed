"""
Matchers command implementation.

Lists the matcher names accepted in expectation ``args``.
"""

from doublekit.provider.matchers import list_matcher_names

# Handled by the builder rather than the matcher table
SYNTHETIC_MATCHERS = ["isArray", "isCallable"]


def run(args) -> int:
    """
    Run the matchers command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (always 0)
    """
    for name in sorted(list_matcher_names() + SYNTHETIC_MATCHERS):
        print(name)
    return 0
