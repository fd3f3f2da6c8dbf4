"""Declarative base and shared column helpers for database models."""

from datetime import datetime

import pytz
from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(pytz.utc)


def created_at_column() -> Column:
    return Column(DateTime(timezone=True), default=utcnow, nullable=False)


def updated_at_column() -> Column:
    return Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )
