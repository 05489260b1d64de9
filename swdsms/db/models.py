"""SQLAlchemy models for the remote ``users`` and ``reports`` tables."""
from __future__ import annotations

from sqlalchemy import BigInteger, Column, Date, DateTime, Integer, Text, func

from .session import Base

# SQLite only autoincrements INTEGER PRIMARY KEY columns.
_Id = BigInteger().with_variant(Integer, "sqlite")


class User(Base):
    __tablename__ = "users"

    id = Column(_Id, primary_key=True, autoincrement=True)
    full_name = Column(Text, nullable=False)
    username = Column(Text, unique=True, nullable=False)
    email = Column(Text, nullable=False)
    account_type = Column(Text, nullable=False)
    password = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Report(Base):
    __tablename__ = "reports"

    id = Column(_Id, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=True)
    grade = Column(Text, nullable=True)
    type = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    incident_date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
