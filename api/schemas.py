"""
Pydantic schemas for the jobs API.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Company(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    contactEmail: str = Field(..., min_length=3, max_length=255)
    contactPhone: str = Field(..., min_length=1, max_length=64)


class CompanyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    contactEmail: Optional[str] = Field(None, min_length=3, max_length=255)
    contactPhone: Optional[str] = Field(None, min_length=1, max_length=64)


class JobCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1, max_length=64)
    description: str = Field(..., min_length=1)
    company: Company


class JobUpdate(BaseModel):
    """Partial update; only the fields sent are changed."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[str] = Field(None, min_length=1, max_length=64)
    description: Optional[str] = Field(None, min_length=1)
    company: Optional[CompanyUpdate] = None


class JobResponse(BaseModel):
    id: str
    title: str
    type: str
    description: str
    company: Company
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
