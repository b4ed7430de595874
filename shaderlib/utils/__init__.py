"""
Utility functions for shaderlib.
"""

import os
import logging


logger = logging.getLogger("shaderlib")


def _set_log_level():
    # Set default level
    logger.setLevel(logging.WARN)
    # Set user-specified level
    level = os.getenv("SHADERLIB_LOG_LEVEL", "")
    if level:
        try:
            if level.isnumeric():
                logger.setLevel(int(level))
            else:
                logger.setLevel(level.upper())
        except Exception:
            logger.warning(f"Invalid shaderlib log level: {level}")


_set_log_level()


def env_flag(name, default="0"):
    """Get whether the environment variable with the given name is set to a truthy value."""
    return os.environ.get(name, default).lower() not in ["", "false", "0", "no"]


def print_numbered(source, file):
    """Print source text with line numbers, aligned up to 5 digits."""
    numbered = "\n".join(
        f"{i + 1:5d}: {line}" for i, line in enumerate(source.splitlines())
    )
    print(numbered, file=file)
