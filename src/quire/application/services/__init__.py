"""Application layer services."""

from quire.application.services.authentication_service import AuthenticationService
from quire.application.services.authorization_service import AuthorizationService
from quire.application.services.magazine_lifecycle_service import (
    MagazineLifecycleService,
)
from quire.application.services.submission_service import SubmissionService
from quire.application.services.user_administration_service import (
    UserAdministrationService,
)

__all__ = [
    "AuthenticationService",
    "AuthorizationService",
    "MagazineLifecycleService",
    "SubmissionService",
    "UserAdministrationService",
]
