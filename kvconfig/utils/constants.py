"""Application-wide constants."""

# Version info
APP_NAME = "kvconfig"
APP_DESCRIPTION = "Reader/writer for flat KEY = VALUE configuration files"

# File format
KEY_VALUE_SEPARATOR = "="
COMMENT_MARKER = "#"
OUTPUT_SEPARATOR = " = "

# Lines are read through a 1024 byte buffer, one slot is the terminator
DEFAULT_MAX_LINE_LENGTH = 1023
DEFAULT_ENCODING = "utf-8"

# Keys must start with one of these
KEY_FIRST_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Skip reasons reported by the parser
SKIP_NO_SEPARATOR = "no separator"
SKIP_EMPTY_KEY = "empty key"
SKIP_INVALID_KEY = "key must begin with an uppercase letter"

# Logging
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
