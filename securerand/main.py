"""Command-line entry point: print one secure random integer in [0, 1000)."""
import argparse
import logging
import sys
from typing import Sequence, TextIO

from securerand.config import settings
from securerand.errors import EntropySourceError
from securerand.logic.generator import BOUND, format_value, generate
from securerand.logic.rng import SecureRandomSource


logger = logging.getLogger(__name__)


def resolve_log_level(name: str) -> int | None:
    """Numeric level for a level name, or None if logging does not know it."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else None


def configure_logging() -> None:
    """Send log records to stderr at the configured level.

    An unknown level name falls back to WARNING; it never stops generation.
    """
    level = resolve_log_level(settings.log_level)
    logging.basicConfig(
        level=level if level is not None else logging.WARNING,
        format=settings.log_format,
        stream=sys.stderr,
    )
    if level is None:
        logger.warning("Unknown log level %r, using WARNING", settings.log_level)


def main(
    argv: Sequence[str] | None = None,
    source: SecureRandomSource | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Main entry point. Returns the process exit status."""
    parser = argparse.ArgumentParser(
        prog="securerand",
        description=f"Print one cryptographically secure random integer in [0, {BOUND}).",
    )
    parser.parse_args(argv)

    configure_logging()
    out = stdout or sys.stdout

    try:
        value = generate(BOUND, source=source)
    except EntropySourceError as e:
        # Unrecoverable; must reach stderr at any configured level
        logger.critical("%s: %s", e.code.value, e.message)
        return e.exit_status

    print(format_value(value), file=out)
    return 0
