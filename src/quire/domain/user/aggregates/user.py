from datetime import datetime
from typing import Optional, Union
from uuid import UUID, uuid4

from quire.domain.shared.time import utc_now
from quire.domain.user.exceptions import InvalidDisplayNameError
from quire.domain.user.value_objects import Email, UserRole

MAX_DISPLAY_NAME_LENGTH = 100


class User:
    """
    User aggregate root.

    Holds member identity and role. Each user is uniquely identified by a
    random UUID generated at creation time. Users are never hard-deleted;
    deactivation is a soft-disable that blocks sign-in.
    """

    def __init__(  # NOQA: PLR0913
        self,
        email: Union[str, Email],
        display_name: str,
        role: Union[str, UserRole] = UserRole.USER,
        is_active: bool = True,
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self._email = email if isinstance(email, Email) else Email(email)
        self._display_name = self._validate_display_name(display_name)
        self._id = id if id is not None else uuid4()
        self._role = UserRole.parse(role)
        self._is_active = is_active
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @staticmethod
    def _validate_display_name(display_name: str) -> str:
        name = (display_name or "").strip()
        if not name:
            msg = "Display name cannot be empty"
            raise InvalidDisplayNameError(msg)
        if len(name) > MAX_DISPLAY_NAME_LENGTH:
            msg = f"Display name cannot exceed {MAX_DISPLAY_NAME_LENGTH} characters"
            raise InvalidDisplayNameError(msg)
        return name

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def email_obj(self) -> Email:
        return self._email

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def is_admin(self) -> bool:
        return self._role == UserRole.ADMIN

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def change_role(self, role: Union[str, UserRole]) -> None:
        self._role = UserRole.parse(role)
        self._updated_at = utc_now()

    def deactivate(self) -> None:
        self._is_active = False
        self._updated_at = utc_now()

    def activate(self) -> None:
        self._is_active = True
        self._updated_at = utc_now()

    @classmethod
    def create(
        cls,
        email: Union[str, Email],
        display_name: str,
        role: UserRole = UserRole.USER,
    ) -> "User":
        return cls(email=email, display_name=display_name, role=role)

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: UUID,
        email: Union[str, Email],
        display_name: str,
        role: Union[str, UserRole],
        is_active: bool,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            id=id,
            email=email,
            display_name=display_name,
            role=role,
            is_active=is_active,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self._email.value}, role={self._role.value})"
