"""Base Pydantic model configuration for soapx models.

Models inherit from SoapxBaseModel to get the same behavior everywhere:
- Immutability (frozen=True) unless a model opts out
- Strict field set (extra="forbid") to catch typos
- Validation of defaults and of assignments on mutable models
"""

from pydantic import BaseModel, ConfigDict


class SoapxBaseModel(BaseModel):
    """Base model for soapx configuration objects.

    Example:
        >>> from pydantic import Field
        >>> class Limits(SoapxBaseModel):
        ...     attempts: int = Field(default=1, ge=1)
        >>> Limits(attempts=3).attempts
        3
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        validate_default=True,
        # Only relevant for models that set frozen=False
        validate_assignment=True,
    )
