"""
Runtime configuration for the record library.
Values are read from the environment once at import; accessor functions re-read where noted.
"""

import os
import logging

# Logging configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Debug flag is also exposed as a function to be dynamic
DEBUG = os.getenv("DEBUG", "false").lower() == "true"

# Whether convenience factories log the input they reject
LOG_VALIDATION_FAILURES = os.getenv("LOG_VALIDATION_FAILURES", "true").lower() == "true"

# Codec used for the byte form of the JSON wire format
JSON_ENCODING = os.getenv("JSON_ENCODING", "utf-8")

# Version string
VERSION = "1.0.0"

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "false").lower() == "true"


def get_log_level():
    """Get the numeric logging level; debug mode forces DEBUG."""
    if debug_enabled():
        return logging.DEBUG
    if LOG_LEVEL not in VALID_LOG_LEVELS:
        return logging.INFO
    return getattr(logging, LOG_LEVEL)


def validation_logging_enabled():
    """Check if rejected input should be logged by the convenience factories."""
    return LOG_VALIDATION_FAILURES


def get_json_encoding():
    """Get the text encoding used for the byte form of records."""
    return JSON_ENCODING


def validate_config():
    """Validate configuration and return any issues."""
    issues = []

    if LOG_LEVEL not in VALID_LOG_LEVELS:
        issues.append(f"LOG_LEVEL must be one of: {VALID_LOG_LEVELS}")

    try:
        "".encode(JSON_ENCODING)
    except LookupError:
        issues.append(f"JSON_ENCODING '{JSON_ENCODING}' is not a known codec")

    return issues
