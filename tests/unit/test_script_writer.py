"""Unit tests for ScriptWriter and its prompt helpers"""

import json

import pytest

from core.models.script import Script, Template
from core.script_writer import (
    ScriptWriter,
    add_overlay_instruction,
    add_pillarbox_instruction,
    extract_json,
    split_sentences,
)
from tests.mocks.fixtures import make_script
from tests.mocks.providers import MockTextProvider, visuals_response


@pytest.fixture
def template():
    return Template.from_dict("documentary", {
        "name": "Documentary",
        "system_prompt": "You are a documentary writer.",
        "format_instructions": "Return JSON with scenes.",
        "example_output": {"scenes": [{"narration": "Once.", "visual_prompt": "A field"}]},
    })


class TestExtractJson:

    def test_plain(self):
        assert extract_json('{"a": 1}') == {"a": 1}

    def test_code_fence(self):
        assert extract_json('```json\n{"a": [1, 2]}\n```') == {"a": [1, 2]}

    def test_surrounding_prose(self):
        assert extract_json('Here you go: {"a": "b"} Enjoy!') == {"a": "b"}

    def test_unparseable(self):
        with pytest.raises(ValueError):
            extract_json("no json here")


class TestSplitSentences:

    def test_split(self):
        assert split_sentences("One. Two! Three?") == ["One.", "Two!", "Three?"]

    def test_limit(self):
        text = " ".join(f"Sentence {i}." for i in range(15))
        assert len(split_sentences(text)) == 10

    def test_no_terminator(self):
        assert split_sentences("  just words  ") == ["just words"]


class TestInstructions:

    def test_pillarbox(self):
        prompt = add_pillarbox_instruction("A lighthouse")
        assert prompt.startswith("A lighthouse. ")
        assert "9:16" in prompt

    def test_overlay_uppercases_keywords(self):
        prompt = add_overlay_instruction("A lighthouse", "storm coast")
        assert '"STORM COAST"' in prompt
        assert "central vertical third" in prompt


class TestScriptWriter:

    @pytest.mark.asyncio
    async def test_generate_script(self, template):
        response = json.dumps({"scenes": [
            {"narration": "First.", "visual_prompt": "Dawn"},
            {"narration": "Second.", "visual_prompt": "Dusk"},
        ]})
        provider = MockTextProvider([response])
        script = await ScriptWriter(provider).generate_script("A story", template)

        assert [s.visual_prompt for s in script.scenes] == ["Dawn", "Dusk"]
        assert provider.prompts[0].startswith("You are a documentary writer.")
        assert 'Input Text: "A story"' in provider.prompts[0]

    @pytest.mark.asyncio
    async def test_generate_script_without_scenes(self, template):
        provider = MockTextProvider(['{"title": "x"}'])
        with pytest.raises(ValueError):
            await ScriptWriter(provider).generate_script("A story", template)

    @pytest.mark.asyncio
    async def test_split_text_keeps_narration(self):
        provider = MockTextProvider([visuals_response(2)])
        script = await ScriptWriter(provider).split_text_to_script("It rained. Then the sun came.")

        assert [s.narration for s in script.scenes] == ["It rained.", "Then the sun came."]
        assert [s.visual_prompt for s in script.scenes] == ["visual 0", "visual 1"]
        assert "exactly 2 items" in provider.prompts[0]

    @pytest.mark.asyncio
    async def test_split_text_count_mismatch(self):
        provider = MockTextProvider([visuals_response(1)])
        with pytest.raises(ValueError, match="correct number of visual prompts"):
            await ScriptWriter(provider).split_text_to_script("One. Two.")

    @pytest.mark.asyncio
    async def test_extract_keywords(self):
        provider = MockTextProvider(["  storm coast \n"])
        assert await ScriptWriter(provider).extract_keywords("A storm hit the coast.") == "storm coast"

    @pytest.mark.asyncio
    async def test_regenerate_narration(self):
        provider = MockTextProvider(["A new line."])
        script = make_script(2)
        text = await ScriptWriter(provider).regenerate_script_part(script, 1, "narration")

        assert text == "A new line."
        assert "Sentence number 2." in provider.prompts[0]

    @pytest.mark.asyncio
    async def test_regenerate_visual(self):
        provider = MockTextProvider(["A new visual"])
        await ScriptWriter(provider).regenerate_script_part(make_script(1), 0, "visual_prompt")
        assert "pillarboxing" in provider.prompts[0]

    @pytest.mark.asyncio
    async def test_regenerate_out_of_range(self):
        with pytest.raises(IndexError):
            await ScriptWriter(MockTextProvider()).regenerate_script_part(make_script(1), 3, "narration")


class TestScriptModel:

    def test_full_narration(self):
        assert make_script(2).full_narration == "Sentence number 1. Sentence number 2."

    def test_round_trip_dict(self):
        script = make_script(2)
        assert Script.from_dict(script.to_dict()) == script
