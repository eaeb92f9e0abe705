"""UI configuration constants.

Centralizes magic numbers and configuration values for the UI module.
"""


class LogLevel:
    """Log level constants with numeric values for comparison.

    Standard logging hierarchy: DEBUG < INFO < WARNING < ERROR
    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)


# Auto-save timer (seconds between "Auto-saving notebook..." log entries)
AUTOSAVE_INTERVAL_SECONDS = 10.0

# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100

# Cell rendering
CELL_ID_PREVIEW_LENGTH = 8
MAX_OUTPUT_LENGTH = 10000  # Characters before truncating cell output

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"

# Experiments table
EXPERIMENT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"
