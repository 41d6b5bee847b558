from quire_auth.persistence.sqlalchemy.repositories.refresh_token_repository import (
    RefreshTokenRepositorySQLAlchemy,
)
from quire_auth.persistence.sqlalchemy.repositories.user_credential_repository import (  # NOQA: E501
    UserCredentialRepositorySQLAlchemy,
)

__all__ = ["RefreshTokenRepositorySQLAlchemy", "UserCredentialRepositorySQLAlchemy"]
