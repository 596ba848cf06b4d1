"""
Schema validation utilities for persisted classification records.

Provides JSON Schema validation with clear error messages and automatic repair
of common problems in stored payloads:
- Removal of unknown keys
- Type coercion (numeric strings to integers)
- Legacy style / age band spellings mapped to current values
- Transparent repair tracking
"""

import json
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional

from jsonschema import Draft7Validator, FormatChecker, ValidationError


# Spellings written by earlier front-ends
LEGACY_STYLE_ALIASES = {
    "reading": "reading_writing",
    "reading-writing": "reading_writing",
    "multi-modal": "multimodal",
    "unknown": "unset",
}

LEGACY_AGE_BAND_ALIASES = {
    "nursery": "early_years",
    "early-years": "early_years",
}


class ValidationResult:
    """
    Result of a validation attempt.

    Attributes:
        valid: Whether data passed validation
        errors: List of error messages
        data: The validated data (may be modified if repair was attempted)
        repairs: List of repairs applied (for transparency)
    """

    def __init__(
        self,
        valid: bool,
        errors: list[str],
        data: Any = None,
        repairs: Optional[list[str]] = None,
    ):
        self.valid = valid
        self.errors = errors
        self.data = data
        self.repairs = repairs or []

    def __bool__(self) -> bool:
        """Allow using result in boolean context."""
        return self.valid

    def __str__(self) -> str:
        """Human-readable representation."""
        if self.valid:
            msg = "✓ Validation passed"
            if self.repairs:
                msg += f" (with {len(self.repairs)} repair(s))"
            return msg
        return f"✗ Validation failed with {len(self.errors)} error(s):\n" + "\n".join(
            f"  - {error}" for error in self.errors
        )


class SchemaValidator:
    """
    JSON Schema validator with auto-repair capabilities.

    Usage:
        validator = SchemaValidator("path/to/schema.json")
        result = validator.validate(data)
        if result:
            print("Valid!")
            print("Repairs applied:", result.repairs)
        else:
            print(result.errors)
    """

    def __init__(self, schema_path: Path | str):
        """
        Initialize validator with a schema file.

        Args:
            schema_path: Path to JSON Schema file
        """
        self.schema_path = Path(schema_path)
        with open(self.schema_path, "r", encoding="utf-8") as f:
            self.schema = json.load(f)
        self.validator = Draft7Validator(self.schema, format_checker=FormatChecker())

    def validate(self, data: Any, auto_repair: bool = False) -> ValidationResult:
        """
        Validate data against schema.

        Args:
            data: Data to validate
            auto_repair: If True, attempt to fix common validation errors

        Returns:
            ValidationResult with validation status and any errors
        """
        errors = [self._format_error(error) for error in self.validator.iter_errors(data)]

        if errors:
            if auto_repair and isinstance(data, dict):
                repaired_data, repairs = self._attempt_repair(data)
                result = self.validate(repaired_data, auto_repair=False)
                result.repairs = repairs
                return result
            return ValidationResult(valid=False, errors=errors, data=data)

        return ValidationResult(valid=True, errors=[], data=data)

    def _format_error(self, error: ValidationError) -> str:
        """
        Convert ValidationError to human-readable message with details.

        Args:
            error: jsonschema ValidationError

        Returns:
            Formatted error message with validator and schema path
        """
        path = " -> ".join(str(p) for p in error.path) if error.path else "root"
        validator_name = getattr(error, "validator", "unknown")
        schema_path = "/".join(str(p) for p in error.schema_path)
        return (
            f"At '{path}': {error.message} "
            f"[validator={validator_name}, schema_path=/{schema_path}]"
        )

    def _attempt_repair(self, data: dict) -> tuple[dict, list[str]]:
        """
        Attempt to automatically fix common validation errors.

        Args:
            data: Original data

        Returns:
            Tuple of (repaired data, list of repairs applied)
        """
        repaired = deepcopy(data)
        repairs: list[str] = []

        self._strip_additional_props(repaired, self.schema, repairs)
        return repaired, repairs

    def _strip_additional_props(self, obj: Any, schema: dict, repairs: list[str], path: str = "root"):
        """
        Recursively remove keys not allowed by schema (additionalProperties: false).

        Args:
            obj: Object to strip
            schema: Schema definition
            repairs: List to append repair messages
            path: Current path (for repair messages)
        """
        if not isinstance(schema, dict) or not isinstance(obj, dict):
            return

        if "properties" in schema:
            allowed = set(schema["properties"].keys())
            if schema.get("additionalProperties") is False:
                for k in [k for k in list(obj.keys()) if k not in allowed]:
                    obj.pop(k, None)
                    repairs.append(f"Removed unknown key '{k}' at {path}")

            for k, subschema in schema["properties"].items():
                if k in obj:
                    self._strip_additional_props(obj[k], subschema, repairs, f"{path}.{k}")


class ClassificationRecordValidator(SchemaValidator):
    """
    Validator for persisted learner classification records.

    Repairs on top of the base validator:
    - Legacy style and age band spellings ("reading", "nursery", ...)
    - Confidence stored as a numeric string or a float with no fraction
    - Out-of-range confidence clamped to [0, 100]
    """

    def __init__(self, schema_path: Optional[Path | str] = None):
        """Initialize validator with the learner classification schema."""
        if schema_path is None:
            try:
                from ..config import config
            except ImportError:
                from src.config import config
            schema_path = config.paths.classification_schema

        super().__init__(schema_path)

    def _attempt_repair(self, data: dict) -> tuple[dict, list[str]]:
        repaired, repairs = super()._attempt_repair(data)

        style = repaired.get("style")
        if isinstance(style, str) and style.lower() in LEGACY_STYLE_ALIASES:
            repaired["style"] = LEGACY_STYLE_ALIASES[style.lower()]
            repairs.append(f"Mapped legacy style '{style}' → '{repaired['style']}'")

        age_band = repaired.get("age_band")
        if isinstance(age_band, str) and age_band.lower() in LEGACY_AGE_BAND_ALIASES:
            repaired["age_band"] = LEGACY_AGE_BAND_ALIASES[age_band.lower()]
            repairs.append(f"Mapped legacy age band '{age_band}' → '{repaired['age_band']}'")

        self._coerce_confidence(repaired, repairs)
        return repaired, repairs

    def _coerce_confidence(self, data: dict, repairs: list[str]):
        """Coerce confidence to an integer in [0, 100] where it is unambiguous."""
        value = data.get("confidence")
        if isinstance(value, bool):
            return

        coerced = value
        if isinstance(value, str):
            try:
                coerced = float(value.strip())
            except ValueError:
                return
        if isinstance(coerced, float):
            if not coerced.is_integer():
                return
            coerced = int(coerced)

        if isinstance(coerced, int):
            clamped = max(0, min(100, coerced))
            if clamped != value or type(value) is not int:
                data["confidence"] = clamped
                repairs.append(f"Coerced confidence: {value!r} → {clamped}")


def validate_classification_record(data: dict, auto_repair: bool = False) -> ValidationResult:
    """
    Quick validation of a persisted classification record.

    Args:
        data: Record dictionary to validate
        auto_repair: Whether to attempt automatic repairs

    Returns:
        ValidationResult

    Example:
        result = validate_classification_record({"style": "visual", "age_band": "adult", "confidence": 80})
        if result:
            print("Valid record!")
        else:
            print("Errors:", result.errors)
    """
    validator = ClassificationRecordValidator()
    return validator.validate(data, auto_repair=auto_repair)
