"""
Shared value objects.

Immutable, validated domain primitives.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, ConfigDict


class UserId(BaseModel):
    """
    User ID value object.

    Wraps the stored document identifier (an ObjectId hex string in
    MongoDB) with validation and type safety.

    Example:
        >>> user_id = UserId(value="5f1b2c3d4e5f6a7b8c9d0e1f")
        >>> assert str(user_id) == "5f1b2c3d4e5f6a7b8c9d0e1f"
        >>> user_id2 = UserId.from_string("5f1b2c3d4e5f6a7b8c9d0e20")
    """

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., min_length=1, description="User identifier")

    @field_validator("value")
    @classmethod
    def not_empty(cls, v: str) -> str:
        """Ensure not empty or whitespace."""
        if not v.strip():
            raise ValueError("UserId cannot be empty or whitespace")
        return v.strip()

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"UserId('{self.value}')"

    def __hash__(self) -> int:
        """Allow use as dict key."""
        return hash(self.value)

    @classmethod
    def from_string(cls, s: str) -> UserId:
        """Create from string."""
        return cls(value=s)
