"""Registration and hostability validation with strong typing."""

from dataclasses import dataclass
from typing import Any
from returns.result import Result, Success, Failure

from pydantic import BaseModel, Field, ConfigDict


class ValidationError(Exception):
    """Validation failed."""

    pass


@dataclass(frozen=True)
class ValidationResult:
    """Validation error with details (for Result pattern)."""

    message: str
    field: str | None = None
    value: Any | None = None


class RegistrationValidator(BaseModel):
    """Base validator with strict configuration."""

    model_config = ConfigDict(
        strict=True, validate_assignment=True, extra="forbid", frozen=True  # Immutable by default
    )


class RequestRegistration(RegistrationValidator):
    """A request possibility being added to an API."""

    id: str
    method: str
    uri: str


class ResponseRegistration(RegistrationValidator):
    """A response possibility: which affordances an exchange's document carries."""

    request: str
    response: str
    message: list[str] = Field(min_length=1)


class ApiValidator:
    """Validates that a hypermedia API can be hosted."""

    @staticmethod
    def validate(api: Any) -> None:
        """
        Validate an API before it is bridged to a server.

        Args:
            api: HypermediaApi instance

        Raises:
            ValidationError: If the API cannot be hosted
        """
        if not api.get_protocol():
            raise ValidationError("API has no transfer protocol")

        if not api.get_media_type():
            raise ValidationError("API has no media type")

        requests = api.get_requests()
        if requests.get_count() == 0:
            raise ValidationError("API has no request possibilities")

        responses = api.get_responses()
        if responses.get_count() == 0:
            raise ValidationError("API has no response possibilities")

        for entry in responses.to_plain():
            for affordance_id in entry["message"]:
                if not requests.has_affordance_with_id(affordance_id):
                    raise ValidationError(
                        f"Response to '{entry['request']}' ({entry['response']}) "
                        f"references unknown affordance '{affordance_id}'"
                    )


def validate_api(api: Any) -> Result[None, ValidationResult]:
    """
    Validate an API (Result pattern version).

    Args:
        api: HypermediaApi instance

    Returns:
        Result indicating success or validation error
    """
    try:
        ApiValidator.validate(api)
        return Success(None)
    except ValidationError as e:
        return Failure(ValidationResult(str(e), field="api", value=api.get_id()))
