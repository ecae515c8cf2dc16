"""Profile use cases."""

from profile_service.application.profile.denormalizer import ProfileDenormalizer
from profile_service.application.profile.get_profile import GetProfileQuery
from profile_service.application.profile.update_profile import UpdateProfileCommand

__all__ = ["ProfileDenormalizer", "GetProfileQuery", "UpdateProfileCommand"]
