"""
Database building blocks: declarative base, session factory, unit of work.
"""
from shared.database.base_model import Base
from shared.database.session import DatabaseSessionFactory
from shared.database.unit_of_work import IUnitOfWork, SQLAlchemyUnitOfWork, store_errors

__all__ = [
    "Base",
    "DatabaseSessionFactory",
    "IUnitOfWork",
    "SQLAlchemyUnitOfWork",
    "store_errors",
]
