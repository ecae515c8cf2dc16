"""Update profile command."""

from dataclasses import dataclass
from typing import Any, Mapping, Tuple, Union

import structlog

from profile_service.application.profile.denormalizer import ProfileDenormalizer
from profile_service.domain.profile.context import DenormalizeOptions
from profile_service.domain.profile.models import UserRecord
from profile_service.domain.profile.ports import IUserRepository
from profile_service.domain.profile.sanitized_user import SanitizedUser
from profile_service.domain.shared.errors import ProvisionedFieldsError, UserNotFoundError
from profile_service.domain.shared.value_objects import UserId

logger = structlog.get_logger(__name__)

EDITABLE_FIELDS: Tuple[str, ...] = (
    "firstname",
    "lastname",
    "job_title",
    "service",
    "building_location",
    "office_location",
    "main_phone",
    "description",
)


@dataclass
class UpdateProfileCommand:
    """Command to update the editable part of a user profile.

    Fields owned by a provisioning source (listed in the user's
    ``profileProvisionedFields`` metadata) cannot be changed. Fields that
    are not editable, not given or None are left untouched.

    Examples:
        >>> command = UpdateProfileCommand(repository, denormalizer)
        >>> profile = await command.execute(user_id, {"firstname": "James"})
        >>> profile.fields["firstname"]
        'James'
    """

    repository: IUserRepository
    denormalizer: ProfileDenormalizer

    async def execute(
        self, user_id: Union[UserId, str], changes: Mapping[str, Any]
    ) -> SanitizedUser:
        """Execute update profile command.

        Args:
            user_id: Identifier of the user to update
            changes: New profile values keyed by field name

        Returns:
            Denormalized updated profile, without private data

        Raises:
            UserNotFoundError: If user doesn't exist
            ProvisionedFieldsError: If changes touch provisioned fields
            InvalidUserRecordError: If a new value has the wrong type
        """
        if not isinstance(user_id, UserId):
            user_id = UserId.from_string(user_id)

        user = await self.repository.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))

        provisioned = set(user.provisioned_fields())
        conflicts = [name for name in changes if name in provisioned]
        if conflicts:
            raise ProvisionedFieldsError(conflicts)

        updates = {
            name: value
            for name, value in changes.items()
            if name in EDITABLE_FIELDS and value is not None
        }
        updated = UserRecord.coerce({**user.to_document(), **updates})

        await self.repository.save(updated)
        logger.info("Profile updated", user_id=user.id, fields=sorted(updates))

        return await self.denormalizer.denormalize(
            updated, DenormalizeOptions(user=updated, do_not_keep_private_data=True)
        )
