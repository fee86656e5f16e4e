"""Common DTOs shared by the resource routes."""
from __future__ import annotations

from pydantic import BaseModel, Field


class CreatedResponse(BaseModel):
    """Identity of a freshly inserted row."""
    id: int = Field(..., description="Identity assigned by storage", example=1)


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Health status", example="healthy")


class RootResponse(BaseModel):
    """Root endpoint response model."""
    status: str = Field(..., description="API status", example="ok")
    service: str = Field(..., description="Service name", example="users-profiles-api")
    version: str = Field(..., description="API version", example="0.1.0")
