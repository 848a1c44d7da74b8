"""Configuration validation utilities."""

import math
from dataclasses import dataclass, fields
from typing import Any

from .defaults import (
    AllocationParams,
    ColumnLabels,
    DecoderParams,
    LoggingParams,
    ReportParams,
    SourceParams,
)


MALFORMED_ROW_POLICIES = ("abort", "skip")
REPORT_FORMATS = ("plain", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

SECTIONS = {
    "source": SourceParams,
    "decoder": DecoderParams,
    "allocation": AllocationParams,
    "report": ReportParams,
    "logging": LoggingParams,
}


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_source_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate source parameters."""
        errors = []

        if "url" in params:
            value = params["url"]
            if not isinstance(value, str) or not value.strip():
                errors.append(ValidationError(
                    field="source.url",
                    message="Must be a non-empty string",
                    value=value
                ))

        if "file_path" in params:
            value = params["file_path"]
            if not isinstance(value, str):
                errors.append(ValidationError(
                    field="source.file_path",
                    message="Must be a string",
                    value=value
                ))

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="source.timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        if "retry_attempts" in params:
            value = params["retry_attempts"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(ValidationError(
                    field="source.retry_attempts",
                    message="Must be a non-negative integer",
                    value=value
                ))

        if "retry_delay_seconds" in params:
            value = params["retry_delay_seconds"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="source.retry_delay_seconds",
                    message="Must be a non-negative number",
                    value=value
                ))

        if "encoding" in params:
            value = params["encoding"]
            if not isinstance(value, str) or not _is_text_encoding(value):
                errors.append(ValidationError(
                    field="source.encoding",
                    message="Must be a text encoding known to Python",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_decoder_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate table decoder parameters."""
        errors = []

        if "malformed_row_policy" in params:
            value = params["malformed_row_policy"]
            if value not in MALFORMED_ROW_POLICIES:
                errors.append(ValidationError(
                    field="decoder.malformed_row_policy",
                    message=f"Must be one of {', '.join(MALFORMED_ROW_POLICIES)}",
                    value=value
                ))

        if "labels" in params:
            labels = params["labels"]
            if not isinstance(labels, dict):
                errors.append(ValidationError(
                    field="decoder.labels",
                    message="Must be a mapping of column role to header label",
                    value=labels
                ))
            else:
                errors.extend(_unknown_keys("decoder.labels", labels, ColumnLabels))
                seen: dict[str, str] = {}
                for role, label in labels.items():
                    if not isinstance(label, str) or not label:
                        errors.append(ValidationError(
                            field=f"decoder.labels.{role}",
                            message="Must be a non-empty string",
                            value=label
                        ))
                    elif label in seen:
                        errors.append(ValidationError(
                            field=f"decoder.labels.{role}",
                            message=f"Duplicates the label of decoder.labels.{seen[label]}",
                            value=label
                        ))
                    else:
                        seen[label] = role

        return errors

    @staticmethod
    def validate_allocation_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate allocation parameters."""
        errors = []

        if "target_budget" in params:
            value = params["target_budget"]
            if not _is_number(value) or not math.isfinite(value) or value <= 0:
                errors.append(ValidationError(
                    field="allocation.target_budget",
                    message="Must be a positive finite number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_report_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate report parameters."""
        errors = []

        if "format" in params and params["format"] not in REPORT_FORMATS:
            errors.append(ValidationError(
                field="report.format",
                message=f"Must be one of {', '.join(REPORT_FORMATS)}",
                value=params["format"]
            ))

        for flag in ("show_weights", "show_budget"):
            if flag in params and not isinstance(params[flag], bool):
                errors.append(ValidationError(
                    field=f"report.{flag}",
                    message="Must be a boolean",
                    value=params[flag]
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="logging.level",
                    message=f"Must be one of {', '.join(LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params and not isinstance(params["format_json"], bool):
            errors.append(ValidationError(
                field="logging.format_json",
                message="Must be a boolean",
                value=params["format_json"]
            ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        for section, value in config.items():
            if section not in SECTIONS:
                errors.append(ValidationError(
                    field=section,
                    message="Unknown configuration section",
                    value=value
                ))
            elif not isinstance(value, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=value
                ))
            else:
                errors.extend(_unknown_keys(section, value, SECTIONS[section]))

        validators = {
            "source": ConfigValidator.validate_source_params,
            "decoder": ConfigValidator.validate_decoder_params,
            "allocation": ConfigValidator.validate_allocation_params,
            "report": ConfigValidator.validate_report_params,
            "logging": ConfigValidator.validate_logging_params,
        }
        for section, validate in validators.items():
            if isinstance(config.get(section), dict):
                errors.extend(validate(config[section]))

        return errors


def _unknown_keys(prefix: str, params: dict[str, Any], params_type: type) -> list[ValidationError]:
    known = {f.name for f in fields(params_type)}
    return [
        ValidationError(field=f"{prefix}.{key}", message="Unknown parameter", value=value)
        for key, value in params.items()
        if key not in known
    ]


def _is_text_encoding(name: str) -> bool:
    try:
        b"".decode(name)
    except LookupError:
        return False
    return True
