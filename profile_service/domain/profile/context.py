"""Viewing context of a denormalization request."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from profile_service.domain.profile.models import UserRecord


class DenormalizeOptions(BaseModel):
    """
    Request-scoped options.

    Attributes:
        do_not_keep_private_data: Strip private fields whoever the viewer is
        user: The logged-in user issuing the request, if any

    Example:
        >>> DenormalizeOptions().do_not_keep_private_data
        False
    """

    model_config = ConfigDict(frozen=True)

    do_not_keep_private_data: bool = False
    user: Optional[UserRecord] = None

    def viewer_is(self, subject: UserRecord) -> bool:
        """True when the logged-in user is the subject itself."""
        return self.user is not None and self.user.id == subject.id
