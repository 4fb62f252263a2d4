"""データモデルのテスト。"""

from datetime import datetime

import pytest
from pydantic import ValidationError

from src.models.agent import AgentStatus, clamp, find_agent, resolve_agent_name
from src.models.interaction import AgentInteraction, InteractionType
from src.models.orchestration import OrchestrationSnapshot, OrchestrationStats
from src.models.project import CrossProjectSynergy, Project, ProjectStatus, SynergyType
from src.models.risk import ProjectRisk, RiskSeverity, RiskType, round_half_up
from src.models.voice import VoiceCommand


class TestAgentModel:
    """Agentモデルのテスト。"""

    def test_enum_values_are_stored_as_strings(self, make_agent):
        """列挙値が文字列として保持されることをテスト。"""
        agent = make_agent(status=AgentStatus.BUSY)
        assert agent.status == "busy"
        assert agent.role == "frontend_developer"

    def test_workload_out_of_range_rejected(self, make_agent):
        """範囲外のワークロードが拒否されることをテスト。"""
        agent = make_agent()
        with pytest.raises(ValidationError):
            agent.model_validate({**agent.model_dump(), "workload": 120})

    def test_is_active(self, make_agent):
        """is_active が active のときのみ True になることをテスト。"""
        assert make_agent(status=AgentStatus.ACTIVE).is_active
        assert not make_agent(status=AgentStatus.IDLE).is_active


class TestAgentHelpers:
    """エージェント関連ヘルパーのテスト。"""

    def test_clamp(self):
        """clamp が範囲内に収めることをテスト。"""
        assert clamp(-5) == 0
        assert clamp(105) == 100
        assert clamp(42.5) == 42.5

    def test_find_agent(self, make_agent):
        """ID でエージェントを検索できることをテスト。"""
        agents = [make_agent(agent_id="a"), make_agent(agent_id="b")]
        assert find_agent(agents, "b").id == "b"
        assert find_agent(agents, "missing") is None
        assert find_agent(agents, None) is None

    def test_resolve_unknown_agent_name(self, make_agent):
        """ロスターにない ID が "unknown" に解決されることをテスト。"""
        agents = [make_agent(agent_id="a", name="Alpha")]
        assert resolve_agent_name(agents, "a") == "Alpha"
        assert resolve_agent_name(agents, "ghost") == "unknown"


class TestInteractionModel:
    """AgentInteractionモデルのテスト。"""

    def test_same_agent_rejected(self):
        """送信元と宛先が同じ場合に拒否されることをテスト。"""
        with pytest.raises(ValidationError):
            AgentInteraction(
                id="i-1",
                from_agent="agent-a",
                to_agent="agent-a",
                type=InteractionType.REVIEW,
            )

    def test_involves(self):
        """involves が送信元・宛先の両方で True になることをテスト。"""
        interaction = AgentInteraction(
            id="i-1", from_agent="a", to_agent="b", type=InteractionType.FEEDBACK
        )
        assert interaction.involves("a")
        assert interaction.involves("b")
        assert not interaction.involves("c")


class TestRiskModel:
    """ProjectRiskモデルのテスト。"""

    def test_round_half_up(self):
        """0.5 が切り上げられることをテスト。"""
        assert round_half_up(40.5) == 41
        assert round_half_up(0.5) == 1
        assert round_half_up(2.4) == 2

    def test_score_is_derived(self):
        """スコアが probability × impact / 100 の四捨五入になることをテスト。"""
        risk = ProjectRisk(
            id="r-1",
            type=RiskType.TEAM_BURNOUT,
            severity=RiskSeverity.LOW,
            probability=45,
            impact=90,
        )
        assert risk.score == 41
        assert risk.model_dump()["score"] == 41

    def test_probability_range(self):
        """範囲外の発生確率が拒否されることをテスト。"""
        with pytest.raises(ValidationError):
            ProjectRisk(
                id="r-1",
                type=RiskType.SCOPE_CREEP,
                severity=RiskSeverity.LOW,
                probability=101,
                impact=10,
            )


class TestProjectModels:
    """プロジェクト関連モデルのテスト。"""

    def test_is_assignable(self):
        """完了・保留中のプロジェクトが割り当て対象外になることをテスト。"""
        assert Project(id="p", name="P", status=ProjectStatus.ACTIVE).is_assignable
        assert Project(id="p", name="P", status=ProjectStatus.PLANNING).is_assignable
        assert not Project(id="p", name="P", status=ProjectStatus.COMPLETED).is_assignable
        assert not Project(id="p", name="P", status=ProjectStatus.ON_HOLD).is_assignable

    def test_synergy_key(self):
        """シナジーのキーがプロジェクトIDの連結になることをテスト。"""
        synergy = CrossProjectSynergy(
            project_ids=["proj-1", "proj-2"], synergy_type=SynergyType.COMPONENT_REUSE
        )
        assert synergy.key == "proj-1-proj-2"

    def test_synergy_requires_two_projects(self):
        """プロジェクトが 1 件だけのシナジーが拒否されることをテスト。"""
        with pytest.raises(ValidationError):
            CrossProjectSynergy(project_ids=["proj-1"], synergy_type=SynergyType.COMPONENT_REUSE)


class TestVoiceCommandModel:
    """VoiceCommandモデルのテスト。"""

    def test_confidence_range(self):
        """信頼度が 0〜1 に制限されることをテスト。"""
        with pytest.raises(ValidationError):
            VoiceCommand(id="cmd-1", transcript="hello", confidence=1.5)


class TestSnapshotModel:
    """OrchestrationSnapshotモデルのテスト。"""

    def test_json_round_trip(self, make_agent):
        """JSON へのシリアライズと再読み込みで内容が一致することをテスト。"""
        snapshot = OrchestrationSnapshot(
            agents=[make_agent()],
            interactions=[],
            risks=[
                ProjectRisk(
                    id="r-1",
                    type=RiskType.TECHNICAL_DEBT,
                    severity=RiskSeverity.CRITICAL,
                    probability=85,
                    impact=80,
                )
            ],
            stats=OrchestrationStats(active_agents=1, completed_tasks=10, efficiency=80),
            timestamp=datetime(2024, 6, 1, 12, 0, 0),
        )
        restored = OrchestrationSnapshot.model_validate_json(snapshot.model_dump_json(indent=2))
        assert restored == snapshot
        assert '"timestamp": "2024-06-01T12:00:00"' in snapshot.model_dump_json(indent=2)
