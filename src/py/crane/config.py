from os import getenv
from .utils.io import DEFAULT_ENCODING  # NOQA: F401

# Name of the minimum `LogLevel` that gets written to stderr
LOG_LEVEL: str = getenv("CRANE_LOG_LEVEL", "Info")

# EOF
