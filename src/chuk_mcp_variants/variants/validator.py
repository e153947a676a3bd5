"""
Document Validator - lints merged style documents.

Resolution never fails on unknown variants or values, so typos in a
document silently select nothing. The validator reports them:
- Defaults for undeclared variants or values
- Compound conditions on undeclared variants or values
- Compound rules that always or never fire
- Declared slots that never receive classes
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from chuk_mcp_variants.models.document import StyleDocument


class ValidationSeverity(str, Enum):
    """Severity level for validation issues."""

    ERROR = "error"  # The document can't behave as written
    WARNING = "warning"  # Probably a typo
    INFO = "info"  # Informational only


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: ValidationSeverity
    code: str
    message: str
    location: str | None = None

    def __str__(self) -> str:
        prefix = f"[{self.severity.value.upper()}]"
        location = f" at {self.location}" if self.location else ""
        return f"{prefix} {self.code}: {self.message}{location}"


class ValidationResult:
    """Result of validating a document."""

    def __init__(self) -> None:
        self.issues: list[ValidationIssue] = []

    def add_error(self, code: str, message: str, location: str | None = None) -> None:
        """Add an error issue."""
        self.issues.append(ValidationIssue(ValidationSeverity.ERROR, code, message, location))

    def add_warning(self, code: str, message: str, location: str | None = None) -> None:
        """Add a warning issue."""
        self.issues.append(ValidationIssue(ValidationSeverity.WARNING, code, message, location))

    def add_info(self, code: str, message: str, location: str | None = None) -> None:
        """Add an info issue."""
        self.issues.append(ValidationIssue(ValidationSeverity.INFO, code, message, location))

    @property
    def is_valid(self) -> bool:
        """Return True if no errors (warnings/info are OK)."""
        return not any(i.severity == ValidationSeverity.ERROR for i in self.issues)

    @property
    def errors(self) -> list[ValidationIssue]:
        """Get all error issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        """Get all warning issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    def codes(self) -> list[str]:
        """Issue codes in report order."""
        return [i.code for i in self.issues]

    def __bool__(self) -> bool:
        """Boolean conversion returns is_valid."""
        return self.is_valid

    def __str__(self) -> str:
        if not self.issues:
            return "Validation passed: no issues found"
        return "\n".join(str(issue) for issue in self.issues)


class DocumentValidator:
    """Validates style document consistency."""

    def validate(self, document: StyleDocument) -> ValidationResult:
        """
        Validate a document.

        Args:
            document: The (usually merged) document to validate

        Returns:
            ValidationResult with any issues found
        """
        result = ValidationResult()

        self._validate_defaults(document, result)
        self._validate_variants(document, result)
        self._validate_compound_rules(document, result)
        self._validate_slots(document, result)

        return result

    def _validate_defaults(self, document: StyleDocument, result: ValidationResult) -> None:
        """Defaults must name declared variants and values."""
        for variant, value in document.default_variants.items():
            location = f"defaultVariants/{variant}"
            if variant not in document.variants:
                result.add_warning(
                    "UNKNOWN_DEFAULT_VARIANT",
                    f"Default set for undeclared variant: {variant}",
                    location,
                )
            elif value is not None and value not in document.variants[variant]:
                if document.is_boolean(variant) and value == "false":
                    continue
                result.add_warning(
                    "UNKNOWN_DEFAULT_VALUE",
                    f"Default '{value}' is not a declared value of variant '{variant}'",
                    location,
                )

    def _validate_variants(self, document: StyleDocument, result: ValidationResult) -> None:
        """Report empty variant tables and values."""
        for variant, table in document.variants.items():
            if not table:
                result.add_info(
                    "EMPTY_VARIANT",
                    f"Variant '{variant}' declares no values",
                    f"variants/{variant}",
                )
                continue
            for value, fragment in table.items():
                if fragment.is_empty:
                    result.add_info(
                        "EMPTY_VARIANT_VALUE",
                        f"Variant value '{variant}.{value}' adds no classes",
                        f"variants/{variant}/{value}",
                    )

    def _validate_compound_rules(self, document: StyleDocument, result: ValidationResult) -> None:
        """Compound conditions should reference declared variants and values."""
        for index, rule in enumerate(document.compound_variants):
            location = f"compoundVariants/{index}"
            if not rule.conditions:
                result.add_warning(
                    "UNCONDITIONAL_COMPOUND",
                    "Compound rule has no conditions and always fires",
                    location,
                )
            for variant, accepted in rule.conditions.items():
                if variant not in document.variants:
                    result.add_info(
                        "UNDECLARED_COMPOUND_VARIANT",
                        f"Compound rule tests undeclared variant: {variant}",
                        f"{location}/{variant}",
                    )
                    continue
                table = document.variants[variant]
                declared = set(table)
                if document.is_boolean(variant):
                    declared |= {"true", "false"}
                elif document.default_variants.get(variant) is None:
                    # An unselected variant without a default matches "false"
                    declared.add("false")
                unknown = [value for value in accepted if value not in declared]
                if unknown and len(unknown) == len(accepted):
                    result.add_error(
                        "UNREACHABLE_COMPOUND",
                        f"Compound rule can never fire: '{variant}' has no value "
                        f"{', '.join(unknown)}",
                        f"{location}/{variant}",
                    )
                elif unknown:
                    result.add_warning(
                        "UNKNOWN_COMPOUND_VALUE",
                        f"Compound rule accepts undeclared values of '{variant}': "
                        f"{', '.join(unknown)}",
                        f"{location}/{variant}",
                    )
            if rule.fragment.is_empty:
                result.add_info(
                    "EMPTY_COMPOUND",
                    "Compound rule adds no classes",
                    location,
                )

    def _validate_slots(self, document: StyleDocument, result: ValidationResult) -> None:
        """Report declared slots that never get classes."""
        fed: set[str] = set()
        for fragment in document.slots.values():
            fed.update(slot for slot, tokens in fragment.classes.items() if tokens)
        for table in document.variants.values():
            for fragment in table.values():
                fed.update(slot for slot, tokens in fragment.classes.items() if tokens)
        for rule in document.compound_variants:
            fed.update(slot for slot, tokens in rule.fragment.classes.items() if tokens)

        for slot in document.slots:
            if slot not in fed:
                result.add_info(
                    "EMPTY_SLOT",
                    f"Slot '{slot}' never receives classes",
                    f"slots/{slot}",
                )


def validate_document(document: StyleDocument) -> ValidationResult:
    """
    Convenience function to validate a document.

    Args:
        document: The document to validate

    Returns:
        ValidationResult with any issues found
    """
    validator = DocumentValidator()
    return validator.validate(document)
