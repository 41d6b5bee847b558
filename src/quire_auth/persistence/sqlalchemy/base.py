"""SQLAlchemy declarative base for quire_auth models.

Auth tables live in their own metadata. The application creates them
alongside its own tables:

    await conn.run_sync(Base.metadata.create_all)
    await conn.run_sync(AuthBase.metadata.create_all)
"""

from sqlalchemy.orm import DeclarativeBase


class AuthBase(DeclarativeBase):
    """Declarative base for quire_auth models."""
