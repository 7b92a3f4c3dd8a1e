"""
Pydantic schemas for the taskboard API.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel


class ThemeResponse(BaseModel):
    theme: str


class SetThemeRequest(BaseModel):
    theme: str


class SuccessResponse(BaseModel):
    success: Literal[True] = True


class SummarizeRequest(BaseModel):
    text: Optional[str] = None


class SummarizeResponse(BaseModel):
    summary: Optional[str]


class CreateTaskRequest(BaseModel):
    title: str


class UpdateTaskRequest(BaseModel):
    title: str
    completed: bool = False


class TaskResponse(BaseModel):
    id: str
    title: str
    completed: bool
    created_at: int


class UpdatedTaskResponse(BaseModel):
    id: str
    title: str
    completed: bool
