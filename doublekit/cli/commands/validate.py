"""
Validate command implementation.

Parses a doubles file and builds every double it declares, so that unknown
targets, methods and matcher names are reported before a test run.
"""

import logging
import re
from pathlib import Path

from doublekit.builder import MockBuilder
from doublekit.config.parser import build_doubles, load_target, parse_config
from doublekit.core.exceptions import DoubleKitError
from doublekit.targets import classify_target

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the validate command.

    Args:
        args: Parsed command-line arguments (file, strict)

    Returns:
        Exit code (0 if every double builds, 1 otherwise)
    """
    config_path = Path(args.file)
    logger.debug(f"Validating {config_path}")

    try:
        config = parse_config(config_path)
        strict = bool(args.strict) or config.settings.strict_invocation_counts
        build_doubles(config, MockBuilder(strict=strict))
    except DoubleKitError as e:
        logger.error(f"{config_path}: {e}")
        return 1
    except (TypeError, ValueError, re.error) as e:
        # Raised by matcher constructors given the wrong arguments
        logger.error(f"{config_path}: invalid matcher arguments: {e}")
        return 1

    for name, double in config.doubles.items():
        kind = classify_target(load_target(double.target))
        print(
            f"  {name}: {double.target} ({kind.value}, "
            f"{len(double.expectations)} expectation(s))"
        )

    print(f"{config_path}: {len(config.doubles)} double(s) OK")
    return 0
