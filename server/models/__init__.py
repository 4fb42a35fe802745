"""Pydantic models for API requests and responses"""

from .requests import (
    SceneBody,
    ScriptBody,
    GenerateScriptRequest,
    RegeneratePartRequest,
    RegeneratePartResponse,
    CreateVideoRequest,
    CreateVideoResponse,
    ReelListResponse,
)

__all__ = [
    "SceneBody",
    "ScriptBody",
    "GenerateScriptRequest",
    "RegeneratePartRequest",
    "RegeneratePartResponse",
    "CreateVideoRequest",
    "CreateVideoResponse",
    "ReelListResponse",
]
