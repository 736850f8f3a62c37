from enum import Enum

BYTES_PER_MB = 1024 * 1024
PAGE_SIZE_BYTES = 4096

# Fraction of the container ceiling at which the runtime places its
# high-memory-load threshold.
HIGH_LOAD_THRESHOLD_RATIO = 0.9

DEFAULT_FALLBACK_LIMIT_MB = 1024
DEFAULT_HEAP_LIMIT_PERCENT = 70


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
