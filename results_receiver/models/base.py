"""
Declarative base shared by all ORM models of the Results Receiver service.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
