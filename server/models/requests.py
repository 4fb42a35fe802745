"""Pydantic models for API requests/responses"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class SceneBody(BaseModel):
    """One scene of a script"""
    narration: str = Field("", description="Narration line spoken over the scene")
    visual_prompt: str = Field("", description="Prompt used to generate the scene image")


class ScriptBody(BaseModel):
    """A full script"""
    scenes: List[SceneBody] = Field(default_factory=list)


class GenerateScriptRequest(BaseModel):
    """Request to draft a script from free text"""
    text: Optional[str] = Field(None, description="Input text to turn into a reel")
    templateId: Optional[str] = Field(None, description="Template used when narration is rewritten")
    keepNarration: bool = Field(False, description="Keep the input sentences as narration")


class RegeneratePartRequest(BaseModel):
    """Request to rewrite one part of one scene"""
    script: ScriptBody
    sceneIndex: int = Field(..., ge=0)
    part: str = Field(..., description="'narration' or 'visual_prompt'")


class RegeneratePartResponse(BaseModel):
    newText: str


class CreateVideoRequest(BaseModel):
    """Request to produce a reel from an approved script"""
    script: ScriptBody
    musicFile: Optional[str] = None
    overlayText: bool = False
    voiceId: Optional[str] = Field(None, description="Voice ID, empty or 'none' for a silent reel")
    originalText: Optional[str] = None
    templateId: Optional[str] = None


class CreateVideoResponse(BaseModel):
    videoUrl: str


class ReelListResponse(BaseModel):
    """One page of the reel gallery"""
    reels: List[Dict[str, Any]]
    currentPage: int
    totalPages: int
