"""キャンバス配置計算のテスト。"""

import pytest

from src.managers.canvas_layout import (
    COLOR_AMBER,
    COLOR_BLUE,
    COLOR_GRAY,
    COLOR_GREEN,
    COLOR_RED,
    compute_canvas_layout,
    connection_color,
    parse_canvas_mode,
    size_modifier,
)
from src.models.agent import AgentStatus
from src.models.canvas import CanvasMode
from src.models.interaction import (
    AgentInteraction,
    InteractionPriority,
    InteractionStatus,
    InteractionType,
)


def _interaction(
    interaction_id: str,
    from_agent: str,
    to_agent: str,
    interaction_type: InteractionType = InteractionType.COLLABORATION,
    status: InteractionStatus = InteractionStatus.IN_PROGRESS,
    priority: InteractionPriority = InteractionPriority.MEDIUM,
) -> AgentInteraction:
    return AgentInteraction(
        id=interaction_id,
        from_agent=from_agent,
        to_agent=to_agent,
        type=interaction_type,
        status=status,
        priority=priority,
    )


class TestSizeModifier:
    """size_modifierのテスト。"""

    def test_performance_mode(self, make_agent):
        """performance モードで効率に比例することをテスト。"""
        assert size_modifier(make_agent(efficiency=100), [], "performance") == pytest.approx(1.25)
        assert size_modifier(make_agent(efficiency=0), [], "performance") == pytest.approx(0.75)

    def test_collaboration_mode_is_capped(self, make_agent):
        """collaboration モードで関与数に応じて拡大し、1.5 で頭打ちになることをテスト。"""
        agent = make_agent(agent_id="a")
        two = [_interaction(f"i-{n}", "a", "b") for n in range(2)]
        many = [_interaction(f"i-{n}", "a", "b") for n in range(10)]
        assert size_modifier(agent, two, CanvasMode.COLLABORATION) == pytest.approx(1.2)
        assert size_modifier(agent, many, CanvasMode.COLLABORATION) == pytest.approx(1.5)

    def test_other_modes(self, make_agent):
        """conflict・不正モードでは 1 になることをテスト。"""
        agent = make_agent()
        assert size_modifier(agent, [], "conflict") == 1.0
        assert size_modifier(agent, [], "bogus") == 1.0
        assert size_modifier(agent, [], None) == 1.0


class TestConnectionColor:
    """connection_colorのテスト。"""

    def test_conflict_mode(self):
        """conflict モードで conflict_resolution が赤になることをテスト。"""
        conflict = _interaction("i", "a", "b", InteractionType.CONFLICT_RESOLUTION)
        review = _interaction("i", "a", "b", InteractionType.REVIEW)
        assert connection_color(conflict, "conflict") == COLOR_RED
        assert connection_color(review, "conflict") == COLOR_BLUE

    def test_collaboration_mode(self):
        """collaboration モードで collaboration が緑になることをテスト。"""
        assert connection_color(_interaction("i", "a", "b"), "collaboration") == COLOR_GREEN

    def test_performance_mode(self):
        """performance モードで優先度により色が変わることをテスト。"""
        high = _interaction("i", "a", "b", priority=InteractionPriority.HIGH)
        low = _interaction("i", "a", "b", priority=InteractionPriority.LOW)
        assert connection_color(high, "performance") == COLOR_AMBER
        assert connection_color(low, "performance") == COLOR_GRAY

    def test_invalid_mode_uses_default(self):
        """不正なモードで既定色になることをテスト。"""
        assert parse_canvas_mode("bogus") is None
        assert connection_color(_interaction("i", "a", "b"), "bogus") == COLOR_BLUE


class TestComputeCanvasLayout:
    """compute_canvas_layoutのテスト。"""

    def test_nodes_are_centered(self, make_agent):
        """ノードが位置を中心に配置されることをテスト。"""
        agents = [make_agent(agent_id="a", x=300, y=200, status=AgentStatus.BUSY)]
        layout = compute_canvas_layout(agents, [], None)
        node = layout.nodes[0]
        assert node.size == 60
        assert (node.x, node.y) == (270, 170)
        assert (node.center_x, node.center_y) == (300, 200)
        assert node.color == COLOR_AMBER
        assert node.tooltip.status == "busy"

    def test_lines_skip_unknown_endpoints(self, make_agent):
        """端点が解決できない接続線が除外されることをテスト。"""
        agents = [make_agent(agent_id="a"), make_agent(agent_id="b", x=500)]
        interactions = [
            _interaction("ok", "a", "b", status=InteractionStatus.PENDING),
            _interaction("dangling", "a", "ghost"),
        ]
        layout = compute_canvas_layout(agents, interactions, "collaboration")
        assert [line.interaction_id for line in layout.lines] == ["ok"]
        assert layout.lines[0].dashed
        assert layout.lines[0].to_x == 500

    def test_collaboration_zones(self, make_agent):
        """collaboration モードで協働中のエージェントにゾーンが描かれることをテスト。"""
        agents = [make_agent(agent_id=i) for i in ("a", "b", "c")]
        interactions = [
            _interaction("i-1", "a", "b"),
            _interaction("i-2", "b", "c", InteractionType.REVIEW),
        ]
        layout = compute_canvas_layout(agents, interactions, CanvasMode.COLLABORATION)
        assert [z.agent_id for z in layout.zones] == ["a", "b"]
        assert all(z.radius == 150 and z.color == COLOR_GREEN for z in layout.zones)

    def test_conflict_zones(self, make_agent):
        """conflict モードで対立解消中のエージェントに赤いゾーンが描かれることをテスト。"""
        agents = [make_agent(agent_id=i) for i in ("a", "b", "c")]
        interactions = [_interaction("i-1", "b", "c", InteractionType.CONFLICT_RESOLUTION)]
        layout = compute_canvas_layout(agents, interactions, "conflict")
        assert [z.agent_id for z in layout.zones] == ["b", "c"]
        assert all(z.radius == 100 and z.color == COLOR_RED for z in layout.zones)

    def test_invalid_mode(self, make_agent):
        """不正なモードでも例外にならず、モードなしで計算されることをテスト。"""
        agents = [make_agent(agent_id="a"), make_agent(agent_id="b")]
        layout = compute_canvas_layout(agents, [_interaction("i", "a", "b")], "bogus")
        assert layout.mode is None
        assert layout.zones == []
        assert all(node.size_modifier == 1.0 for node in layout.nodes)
        assert layout.lines[0].color == COLOR_BLUE

    def test_canvas_dimensions(self, make_agent):
        """キャンバスサイズが引数どおりになることをテスト。"""
        layout = compute_canvas_layout([make_agent()], [], None, width=800, height=600)
        assert (layout.width, layout.height) == (800, 600)
