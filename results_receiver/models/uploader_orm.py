"""
SQLAlchemy ORM model for the 'uploaders' table.
"""

from sqlalchemy import Column, Text, TIMESTAMP
from sqlalchemy.sql import func

from .base import Base


class UploaderORM(Base):
    """
    Credentials of a client allowed to upload test runs.

    Attributes:
        username (str): Primary key.
        password_hash (str): Hex encoded SHA-256 digest of the password.
        created_at (datetime): When the uploader was provisioned.
    """
    __tablename__ = "uploaders"

    username = Column(Text, primary_key=True, comment="Uploader name.")
    password_hash = Column(Text, nullable=False, comment="SHA-256 hex digest of the password.")
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), comment="Provisioning time.")

    def __repr__(self) -> str:
        return f"<UploaderORM(username='{self.username}')>"
