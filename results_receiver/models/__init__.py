"""
Models package for the Results Receiver service.

This package contains SQLAlchemy ORM models and Pydantic DTOs.
"""

# Ensure all ORM models are registered with the Base metadata when this package is imported.
from . import base
from . import test_run_orm
from . import uploader_orm

from .base import Base
from .test_run_orm import TestRunORM
from .uploader_orm import UploaderORM

from .dtos import CheckRunCompletion, TestRunDTO

__all__ = [
    # Base
    "Base",
    # ORMs
    "TestRunORM",
    "UploaderORM",
    # DTOs
    "CheckRunCompletion",
    "TestRunDTO",
]
