"""Unit tests for the typed filter graph"""

import pytest

from core.assembly.graph import (
    FilterGraph,
    GraphError,
    NodeKind,
    crossfade_node,
    format_seconds,
    format_volume,
    mix_node,
    normalize_node,
    passthrough_node,
    volume_node,
)
from core.errors import CompositionError


class TestFormatting:
    """Number formatting inside filter expressions"""

    @pytest.mark.parametrize("value,expected", [
        (3.5, "3.5"),
        (4.0, "4"),
        (11.5, "11.5"),
        (0.0, "0"),
        (2.3333333, "2.333"),
        (14.25, "14.25"),
    ])
    def test_format_seconds(self, value, expected):
        assert format_seconds(value) == expected

    @pytest.mark.parametrize("value,expected", [
        (1.0, "1.00"),
        (0.15, "0.15"),
        (0.25, "0.25"),
    ])
    def test_format_volume(self, value, expected):
        assert format_volume(value) == expected


class TestNodes:
    """Rendering of individual nodes"""

    def test_normalize(self):
        node = normalize_node(2, "v2", "crop=ih*9/16:ih", "scale=1080:1920")
        assert node.kind == NodeKind.NORMALIZE
        assert node.render() == "[2:v]crop=ih*9/16:ih,scale=1080:1920,setsar=1[v2]"

    def test_normalize_without_crop(self):
        node = normalize_node(0, "v0", None, "scale=1080:1920")
        assert node.render() == "[0:v]scale=1080:1920,setsar=1[v0]"

    def test_crossfade(self):
        node = crossfade_node("v0", "v1", 0.5, 3.5, "c1")
        assert node.render() == "[v0][v1]xfade=transition=fade:duration=0.5:offset=3.5[c1]"

    def test_video_passthrough(self):
        assert passthrough_node("v0", "v_out").render() == "[v0]copy[v_out]"

    def test_audio_passthrough(self):
        assert passthrough_node("4:a", "a_out", audio=True).render() == "[4:a]acopy[a_out]"

    def test_volume_with_trim(self):
        node = volume_node(3, 0.25, "a_out", trim_to=8.0)
        assert node.render() == "[3:a]volume=0.25,atrim=0:8[a_out]"

    def test_volume_without_trim(self):
        assert volume_node(1, 1.0, "narration").render() == "[1:a]volume=1.00[narration]"

    def test_mix(self):
        node = mix_node(["narration", "bgm"], "a_out")
        assert node.render() == "[narration][bgm]amix=inputs=2:duration=first[a_out]"


class TestFilterGraph:
    """Label bookkeeping"""

    def test_render_joins_statements(self):
        graph = FilterGraph()
        graph.add(normalize_node(0, "v0", None, "scale=1080:1920"))
        graph.add(passthrough_node("v0", "v_out"))
        assert graph.render() == "[0:v]scale=1080:1920,setsar=1[v0]; [v0]copy[v_out]"
        assert graph.labels() == ["v0", "v_out"]

    def test_undefined_label(self):
        graph = FilterGraph()
        with pytest.raises(GraphError):
            graph.add(passthrough_node("v7", "v_out"))

    def test_duplicate_output(self):
        graph = FilterGraph()
        graph.add(normalize_node(0, "v0", None, "scale=1080:1920"))
        with pytest.raises(GraphError):
            graph.add(normalize_node(1, "v0", None, "scale=1080:1920"))

    def test_graph_error_is_composition_error(self):
        graph = FilterGraph()
        with pytest.raises(CompositionError) as exc:
            graph.extend([passthrough_node("missing", "v_out")])
        assert exc.value.kind == "index_assignment_error"
