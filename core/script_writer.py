"""
Script writing on top of a generative text provider.

Drafts scene scripts from free text (with or without a template), rewrites
individual scene parts and extracts overlay keywords.
"""

import json
import re
from typing import Any, Dict, List

from core.models.script import Scene, Script, Template
from core.providers.base import TextProvider


MAX_SENTENCES = 10

VERTICAL_FRAME_INSTRUCTION = (
    "CRITICAL INSTRUCTION: The final image must be a VERTICAL 9:16 composition that fills the "
    "FULL HEIGHT of the square output frame. Add black bars ONLY to the left and right "
    "(pillarboxing) to fill the width."
)

OVERLAY_PLACEMENT_INSTRUCTION = (
    "CRITICAL: This square image will be programmatically center-cropped into a tall 9:16 "
    "video frame, cutting off the left and right sides. To ensure the text is not cropped, "
    "you MUST render it in a compact, multi-line block if necessary, and keep it strictly "
    "within the central vertical third of the image. The text must be far from the left and "
    "right edges."
)


def extract_json(response: str) -> Dict[str, Any]:
    """
    Parse JSON from a model response, tolerating markdown code fences.

    Raises:
        ValueError: If no JSON object can be parsed
    """
    cleaned = re.sub(r"```(?:json)?", "", response).strip()
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass

    match = re.search(r"\{.*\}", cleaned, re.DOTALL)
    if match:
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError:
            pass
    raise ValueError(f"Could not parse JSON from model response: {response[:200]}")


def split_sentences(text: str, limit: int = MAX_SENTENCES) -> List[str]:
    """Split text into sentences ending in . ! or ?, keeping at most ``limit``."""
    sentences = [s.strip() for s in re.findall(r"[^.!?]+[.!?]+", text)]
    sentences = [s for s in sentences if s]
    if not sentences:
        sentences = [text.strip()]
    return sentences[:limit]


def add_pillarbox_instruction(prompt: str) -> str:
    return f"{prompt}. {VERTICAL_FRAME_INSTRUCTION}"


def add_overlay_instruction(prompt: str, keywords: str) -> str:
    return f'{prompt} The text "{keywords.upper()}" is rendered on the image. {OVERLAY_PLACEMENT_INSTRUCTION}'


class ScriptWriter:
    """Writes and edits reel scripts with a TextProvider"""

    def __init__(self, provider: TextProvider):
        self.provider = provider

    async def generate_script(self, input_text: str, template: Template) -> Script:
        """Draft a script from free text following a template."""
        example = json.dumps({"scenes": template.example_output.get("scenes", [])}, indent=2)
        prompt = (
            f"{template.system_prompt}\n"
            f'Input Text: "{input_text}"\n'
            f"{template.format_instructions}\n"
            f"Example of the JSON structure you should provide:\n{example}"
        )
        response = await self.provider.generate_text(prompt)
        return Script.from_dict(extract_json(response))

    async def split_text_to_script(self, input_text: str) -> Script:
        """
        Keep the user's own words as narration, one scene per sentence.

        Raises:
            ValueError: If the model returns a different number of visuals
        """
        sentences = split_sentences(input_text)
        numbered = "\n".join(f"{i + 1}. {s}" for i, s in enumerate(sentences))
        prompt = (
            "You are a creative director. For each numbered sentence provided below, create a "
            "single, highly detailed, and cinematic visual prompt for an AI image generator.\n"
            f"{VERTICAL_FRAME_INSTRUCTION}\n"
            'Return your response as a valid JSON object with a single key "visuals", which is '
            f"an array of strings. The array must have exactly {len(sentences)} items.\n"
            f"Input Sentences:\n{numbered}"
        )
        response = await self.provider.generate_text(prompt)
        visuals = extract_json(response).get("visuals")

        if not visuals or len(visuals) != len(sentences):
            raise ValueError("AI did not return the correct number of visual prompts.")

        return Script(scenes=[
            Scene(narration=sentence, visual_prompt=str(visual).strip())
            for sentence, visual in zip(sentences, visuals)
        ])

    async def extract_keywords(self, narration: str) -> str:
        prompt = (
            "From the following sentence, extract the 1 to 3 most important keywords. "
            "Return only the keywords, separated by a space.\n"
            f'Sentence: "{narration}"\n'
            "Keywords:"
        )
        return (await self.provider.generate_text(prompt)).strip()

    async def regenerate_script_part(self, script: Script, scene_index: int, part: str) -> str:
        """
        Produce a replacement narration or visual prompt for one scene.

        Args:
            script: Current script
            scene_index: Index of the scene to rewrite
            part: "narration" or anything else for the visual prompt

        Raises:
            IndexError: If scene_index is out of range
        """
        if not 0 <= scene_index < len(script.scenes):
            raise IndexError(f"Scene index {scene_index} out of range")
        scene = script.scenes[scene_index]

        if part == "narration":
            prompt = (
                f'Visual: "{scene.visual_prompt}". Narration: "{scene.narration}". '
                "Generate one new, concise alternative for the narration. Return only the new text."
            )
        else:
            prompt = (
                f'Narration: "{scene.narration}". Generate one new, highly detailed visual prompt.\n'
                "CRITICAL INSTRUCTION: The new visual must be a VERTICAL 9:16 composition that fills "
                "the FULL HEIGHT of the square output frame, with black bars ONLY on the left and "
                "right (pillarboxing).\n"
                "Return only the new visual prompt text."
            )
        return (await self.provider.generate_text(prompt)).strip()
