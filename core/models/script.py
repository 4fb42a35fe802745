"""
Script models

A script is an ordered list of scenes; each scene carries the narration line
spoken over it and the prompt used to generate its image.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


@dataclass
class Scene:
    """One scene of a reel"""
    narration: str
    visual_prompt: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Scene":
        return cls(
            narration=str(data.get("narration", "")).strip(),
            visual_prompt=str(data.get("visual_prompt", "")).strip(),
        )


@dataclass
class Script:
    """Ordered scenes for a reel"""
    scenes: List[Scene] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Script":
        scenes = data.get("scenes")
        if not isinstance(scenes, list):
            raise ValueError("Script must contain a 'scenes' list")
        return cls(scenes=[Scene.from_dict(s) for s in scenes])

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @property
    def full_narration(self) -> str:
        return " ".join(s.narration for s in self.scenes)


@dataclass
class Template:
    """
    A script-writing template loaded from the templates directory.

    Attributes:
        id: File stem of the template
        name: Display name
        system_prompt: Instructions placed before the input text
        format_instructions: Output format instructions
        example_output: Example script shown to the model
    """
    id: str
    name: str
    system_prompt: str = ""
    format_instructions: str = ""
    example_output: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, template_id: str, data: Dict[str, Any]) -> "Template":
        return cls(
            id=template_id,
            name=data.get("name", template_id),
            system_prompt=data.get("system_prompt", ""),
            format_instructions=data.get("format_instructions", ""),
            example_output=data.get("example_output") or {},
        )


@dataclass
class ReelMetadata:
    """
    Sidecar record stored next to each reel as prompt.json.

    Keys are camelCase on disk to match what the gallery front end reads.
    """
    original_text: Optional[str] = None
    template_id: Optional[str] = None
    voice_id: Optional[str] = None
    music_file: Optional[str] = None
    overlay_text: bool = False
    final_script: Optional[Dict[str, Any]] = None

    def to_json_dict(self) -> Dict[str, Any]:
        return {
            "originalText": self.original_text,
            "templateId": self.template_id,
            "voiceId": self.voice_id,
            "musicFile": self.music_file,
            "overlayText": self.overlay_text,
            "finalScript": self.final_script,
        }
