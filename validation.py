"""Validation of inbound real estate documents against the declared schema."""

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Type

from pydantic import BaseModel, ValidationError

from schemas import RealEstateDocument, ValidationErrorDetail


class InvalidDocumentError(TypeError):
    """Raised when the input is not a JSON object and cannot be validated at all."""


@dataclass
class ValidationResult:
    valid: bool
    errors: List[ValidationErrorDetail] = field(default_factory=list)
    document: Optional[BaseModel] = None


def format_field_path(loc: Iterable[Any]) -> str:
    """Join a pydantic error location into a dotted path, e.g. ``property.address.zip``."""
    return ".".join(str(part) for part in loc)


def to_error_details(exc: ValidationError) -> List[ValidationErrorDetail]:
    return [
        ValidationErrorDetail(
            field=format_field_path(error["loc"]),
            constraint=error["type"],
            message=error["msg"],
        )
        for error in exc.errors(include_url=False)
    ]


def validate_document(data: Any, model: Type[BaseModel]) -> ValidationResult:
    """
    Validate ``data`` against ``model``, collecting every error in the document.

    Raises InvalidDocumentError if ``data`` is not a mapping.
    """
    if not isinstance(data, Mapping):
        raise InvalidDocumentError(
            f"Expected a JSON object, got {type(data).__name__}"
        )
    try:
        document = model.model_validate(data)
    except ValidationError as exc:
        return ValidationResult(valid=False, errors=to_error_details(exc))
    return ValidationResult(valid=True, document=document)


def validate_real_estate_data(data: Any) -> ValidationResult:
    return validate_document(data, RealEstateDocument)
