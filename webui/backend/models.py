"""Request/response models for the B-roll Web API."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from litestar.datastructures import UploadFile
from pydantic import BaseModel, Field


class GenerateBrollRequest(BaseModel):
    script: Optional[str] = None


@dataclass
class ProjectForm:
    """New-project form: typed script or an uploaded PDF.

    Accepts both ``multipart/form-data`` and ``application/x-www-form-urlencoded``.
    """
    title: str = ""
    description: str = ""
    generate: bool = True
    file: Optional[UploadFile] = None

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "ProjectForm":
        upload = form.get("file")
        generate = str(form.get("generate", "true")).strip().lower()
        return cls(
            title=str(form.get("title") or ""),
            description=str(form.get("description") or ""),
            generate=generate not in ("0", "false", "no", "off"),
            file=upload if isinstance(upload, UploadFile) else None,
        )


class ConfigPayload(BaseModel):
    hf_token: str = ""
    model: str = "mistralai/Mistral-7B-Instruct-v0.3"
    target_count: int = Field(default=10, ge=1, le=50)
    max_attempts: int = Field(default=3, ge=1, le=10)
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    min_categories: int = Field(default=3, ge=1, le=6)
    require_camera_language: bool = True
