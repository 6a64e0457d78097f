"""
Structured logging for record construction, validation and serialization.
Rejected input is sanitized before it reaches a log line.
"""

import logging
from typing import Any, Dict, List

from src.core.config import get_log_level

SENSITIVE_FIELDS = ['name', 'value', 'input', 'payload', 'ignored']


class StructuredLogger:
    """Structured logger for record operations."""

    def __init__(self, name: str = "record"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(get_log_level())

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None, level: int = logging.INFO):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.log(level, message)

    def log_record_operation(self, operation: str, record_id: str, status: str = "success", details: Dict[str, Any] = None):
        """Log a record-specific operation at debug level."""
        log_details = {"record_id": record_id}
        if details:
            log_details.update(details)

        self.log_operation(f"record.{operation}", status, log_details, level=logging.DEBUG)

    def log_schema_validation_success(self, operation: str, target_identifier: str, source: str = "factory"):
        """Log successful schema validation."""
        log_details = {
            "operation": operation,
            "target_identifier": target_identifier,
            "source": source
        }
        self.log_operation("schema_validation.success", "validated", log_details, level=logging.DEBUG)

    def log_schema_validation_error(self, operation: str, errors: List[Any], source_record: Dict[str, Any] = None):
        """Log schema validation errors with sanitized details."""
        sanitized_errors = []
        for error in errors:
            if isinstance(error, dict):
                # pydantic error dicts carry the offending input and a docs url
                sanitized_error = {k: v for k, v in error.items() if k not in ('url', 'ctx')}
                if 'input' in sanitized_error:
                    sanitized_error['input'] = "[REDACTED]"
                sanitized_errors.append(sanitized_error)
            else:
                sanitized_errors.append(str(error)[:100])

        log_details = {
            "operation": operation,
            "errors": sanitized_errors,
            "error_count": len(sanitized_errors)
        }

        if isinstance(source_record, dict) and source_record.get("id"):
            # Only log identifiers, not values
            log_details["target_identifier"] = source_record["id"]

        self.log_operation("schema_validation.error", "rejected", log_details, level=logging.WARNING)

    def log_serialization_error(self, operation: str, record_id: str, error: Exception):
        """Log an encoder or decoder failure."""
        log_details = {
            "operation": operation,
            "record_id": record_id,
            "error_type": type(error).__name__,
            "error": str(error)[:100]
        }
        self.log_operation("serialization.error", "failed", log_details, level=logging.ERROR)

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)


# Global logger instance
logger = StructuredLogger()


def log_schema_validation_success(operation: str, target_identifier: str, source: str = "factory"):
    """Log successful schema validation."""
    logger.log_schema_validation_success(operation, target_identifier, source)


def log_schema_validation_error(operation: str, errors: List[Any], source_record: Dict[str, Any] = None):
    """Log schema validation errors with sanitized details."""
    logger.log_schema_validation_error(operation, errors, source_record)


def log_serialization_error(operation: str, record_id: str, error: Exception):
    """Log an encoder or decoder failure."""
    logger.log_serialization_error(operation, record_id, error)


def sanitize_payload(payload: Any, reveal_sensitive: bool = False, sensitive_fields: List[str] = None) -> Any:
    """Sanitize payloads for audit logging."""
    if sensitive_fields is None:
        sensitive_fields = SENSITIVE_FIELDS

    if isinstance(payload, dict):
        sanitized = {}
        for k, v in payload.items():
            if reveal_sensitive or k not in sensitive_fields:
                sanitized[k] = sanitize_payload(v, reveal_sensitive, sensitive_fields)
            else:
                sanitized[k] = "[REDACTED]"
        return sanitized
    elif isinstance(payload, str):
        # Truncate long strings
        return payload[:100] + "..." if len(payload) > 100 else payload
    elif isinstance(payload, list):
        return [sanitize_payload(item, reveal_sensitive, sensitive_fields) for item in payload]
    else:
        return payload
