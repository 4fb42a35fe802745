"""
Reel library - on-disk layout of reels, templates and music.

Each reel lives in outputs/<reel_id>/ with reel.mp4 and a prompt.json sidecar.
Directories are created by initialize(), never as an import side effect.
"""

import json
import logging
import math
import os
from pathlib import Path
from typing import Any, Dict, List, Tuple

from core.config import Settings
from core.models.script import ReelMetadata, Template

logger = logging.getLogger(__name__)

VIDEO_FILENAME = "reel.mp4"
METADATA_FILENAME = "prompt.json"


class ReelLibrary:
    """Listing and lookup for generated reels and their inputs"""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.output_dir = settings.output_path
        self.templates_dir = settings.templates_path
        self.music_dir = settings.music_path
        self.assets_dir = settings.assets_path

    def initialize(self) -> None:
        """Create the output, assets, templates and music directories."""
        for directory in (self.output_dir, self.assets_dir, self.templates_dir, self.music_dir):
            directory.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Reel library initialized at {self.output_dir}")

    # ------------------------------------------------------------
    # Reels
    # ------------------------------------------------------------

    def reel_dir(self, reel_id: str) -> Path:
        return self.output_dir / reel_id

    def create_reel_dir(self, reel_id: str) -> Path:
        """
        Create a reel's working directory.

        Raises:
            FileExistsError: If the reel directory already exists
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.reel_dir(reel_id)
        path.mkdir()
        return path

    def allocate_reel_dir(self, first_id: int) -> Tuple[str, Path]:
        """Claim the first free numeric reel id at or after first_id."""
        reel_id = first_id
        while True:
            try:
                return str(reel_id), self.create_reel_dir(str(reel_id))
            except FileExistsError:
                reel_id += 1

    def reel_video_path(self, reel_id: str) -> Path:
        """
        Path to a reel's video.

        Raises:
            ValueError: If reel_id is not purely numeric
            FileNotFoundError: If the reel has no video
        """
        if not reel_id.isdigit():
            raise ValueError("Invalid Reel ID format.")
        path = self.reel_dir(reel_id) / VIDEO_FILENAME
        if not path.is_file():
            raise FileNotFoundError(f"Reel not found: {reel_id}")
        return path

    def write_metadata(self, reel_id: str, metadata: ReelMetadata) -> Path:
        """
        Write a reel's prompt.json sidecar. The sidecar is write-once.

        Raises:
            FileExistsError: If the reel already has a sidecar
        """
        path = self.reel_dir(reel_id) / METADATA_FILENAME
        with open(path, "x", encoding="utf-8") as f:
            json.dump(metadata.to_json_dict(), f, indent=2)
        return path

    def read_metadata(self, reel_id: str) -> Dict[str, Any]:
        with open(self.reel_dir(reel_id) / METADATA_FILENAME, encoding="utf-8") as f:
            return json.load(f)

    def _created_at(self, path: Path) -> float:
        stats = path.stat()
        # st_birthtime is only available on some platforms
        return getattr(stats, "st_birthtime", stats.st_mtime) * 1000

    def list_reels(self, page: int = 1, limit: int = 6) -> Dict[str, Any]:
        """
        List finished reels, newest first.

        Only directories holding both the video and its sidecar count.

        Returns:
            Dict with reels, currentPage and totalPages
        """
        page = page if page and page > 0 else 1
        limit = limit if limit and limit > 0 else 6

        reels = []
        if self.output_dir.exists():
            for folder in self.output_dir.iterdir():
                if not folder.is_dir():
                    continue
                if not (folder / VIDEO_FILENAME).exists() or not (folder / METADATA_FILENAME).exists():
                    continue
                try:
                    prompt = self.read_metadata(folder.name)
                except (OSError, json.JSONDecodeError) as e:
                    logger.warning(f"Skipping reel {folder.name}: unreadable metadata ({e})")
                    continue
                reels.append({
                    "id": folder.name,
                    "prompt": prompt,
                    "createdAt": self._created_at(folder),
                })

        reels.sort(key=lambda r: r["createdAt"], reverse=True)
        start = (page - 1) * limit
        return {
            "reels": reels[start:start + limit],
            "currentPage": page,
            "totalPages": math.ceil(len(reels) / limit),
        }

    # ------------------------------------------------------------
    # Music and templates
    # ------------------------------------------------------------

    def list_music(self) -> List[str]:
        return sorted(f for f in os.listdir(self.music_dir) if f.endswith(".mp3"))

    def music_file(self, name: str) -> Path:
        """
        Resolve a music selection inside the music directory.

        Raises:
            FileNotFoundError: If the file is absent or outside the directory
        """
        path = (self.music_dir / name).resolve()
        if path.parent != self.music_dir.resolve() or not path.is_file():
            raise FileNotFoundError(f"Music file not found: {name}")
        return path

    def list_templates(self) -> List[Dict[str, str]]:
        templates = []
        for filename in sorted(os.listdir(self.templates_dir)):
            if not filename.endswith(".json"):
                continue
            template_id = Path(filename).stem
            templates.append({"id": template_id, "name": self.load_template(template_id).name})
        return templates

    def load_template(self, template_id: str) -> Template:
        """
        Load a template by id.

        Raises:
            FileNotFoundError: If no such template exists
        """
        path = (self.templates_dir / f"{template_id}.json").resolve()
        if path.parent != self.templates_dir.resolve() or not path.is_file():
            raise FileNotFoundError(f"Template not found: {template_id}")
        with open(path, encoding="utf-8") as f:
            return Template.from_dict(template_id, json.load(f))
