"""Schemas for the health endpoint."""

from datetime import datetime

from pydantic import BaseModel


class HealthRead(BaseModel):
    status: str
    database: str
    environment: str
    timestamp: datetime


__all__ = ["HealthRead"]
