"""Storage port for members."""

from abc import ABC, abstractmethod
from typing import Optional, Union
from uuid import UUID

from quire.domain.user.aggregates.user import User
from quire.domain.user.value_objects.email import Email


class UserRepository(ABC):
    """Members are looked up by id or by normalized email, never deleted."""

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> Optional[User]: ...

    @abstractmethod
    async def find_by_email(self, email: Union[str, Email]) -> Optional[User]:
        """Case-insensitive lookup.

        Raises
        ------
        InvalidEmailError
            If ``email`` is not a syntactically valid address
        """

    @abstractmethod
    async def exists_by_email(self, email: Union[str, Email]) -> bool: ...

    @abstractmethod
    async def save(self, user: User) -> None:
        """Insert a new member or overwrite role, status and profile fields.

        Raises
        ------
        EmailAlreadyExistsError
            If another member already uses the address
        """

    @abstractmethod
    async def list_all(self) -> list[User]:
        """Every member, oldest account first (the admin user list)."""

    @abstractmethod
    async def count(self) -> int: ...
