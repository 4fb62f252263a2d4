"""ステータスシミュレーターのテスト。"""

import random
from datetime import timedelta

from src.config.agent_catalog import AGENT_DEFINITIONS
from src.managers.status_simulator import (
    INITIAL_ACTIVE_AGENTS,
    create_initial_agents,
    simulate_status_tick,
)
from src.models.agent import AgentStatus


class TestCreateInitialAgents:
    """create_initial_agentsのテスト。"""

    def test_roster_follows_catalog(self, sample_agents):
        """ロスターが役割カタログ順に生成されることをテスト。"""
        assert len(sample_agents) == len(AGENT_DEFINITIONS)
        assert [a.role for a in sample_agents] == [r.value for r in AGENT_DEFINITIONS]
        assert len({a.id for a in sample_agents}) == len(sample_agents)

    def test_initial_statuses(self, sample_agents):
        """先頭の 6 名が active、残りが idle になることをテスト。"""
        statuses = [a.status for a in sample_agents]
        assert statuses[:INITIAL_ACTIVE_AGENTS] == ["active"] * INITIAL_ACTIVE_AGENTS
        assert all(s == "idle" for s in statuses[INITIAL_ACTIVE_AGENTS:])

    def test_grid_layout(self, sample_agents):
        """グリッド配置の座標をテスト。"""
        assert (sample_agents[0].location.x, sample_agents[0].location.y) == (100, 100)
        assert (sample_agents[3].location.x, sample_agents[3].location.y) == (700, 100)
        assert (sample_agents[4].location.x, sample_agents[4].location.y) == (100, 300)

    def test_metric_ranges(self, sample_agents):
        """初期値が想定範囲内にあることをテスト。"""
        for agent in sample_agents:
            assert 20 <= agent.workload <= 99
            assert 70 <= agent.efficiency <= 99
            assert 70 <= agent.expertise <= 99
            assert agent.current_task

    def test_same_seed_same_roster(self, fixed_now):
        """同じシードで同じロスターになることをテスト。"""
        first = create_initial_agents(random.Random(1), fixed_now)
        second = create_initial_agents(random.Random(1), fixed_now)
        assert first == second


class TestSimulateStatusTick:
    """simulate_status_tickのテスト。"""

    def test_values_stay_in_bounds(self, sample_agents, fixed_now):
        """多数のティック後も値が [0, 100] に収まることをテスト。"""
        rng = random.Random(3)
        agents = sample_agents
        for i in range(500):
            agents = simulate_status_tick(agents, rng, fixed_now + timedelta(seconds=i))
            for agent in agents:
                assert 0 <= agent.workload <= 100
                assert 0 <= agent.efficiency <= 100

    def test_extremes_are_clamped(self, make_agent, fixed_now):
        """境界値のエージェントでもクランプされることをテスト。"""
        agents = [make_agent(workload=100, efficiency=0)]
        rng = random.Random(0)
        for _ in range(50):
            agents = simulate_status_tick(agents, rng, fixed_now)
            assert 0 <= agents[0].workload <= 100
            assert 0 <= agents[0].efficiency <= 100

    def test_input_not_mutated(self, sample_agents, fixed_now):
        """入力リストとその要素が変更されないことをテスト。"""
        before = [a.model_copy(deep=True) for a in sample_agents]
        simulate_status_tick(sample_agents, random.Random(5), fixed_now)
        assert sample_agents == before

    def test_last_active_only_for_previously_active(self, make_agent, fixed_now):
        """last_active はティック前に active だったエージェントのみ更新されることをテスト。"""
        later = fixed_now + timedelta(minutes=5)
        agents = [
            make_agent(agent_id="a", status=AgentStatus.ACTIVE),
            make_agent(agent_id="b", status=AgentStatus.IDLE),
        ]
        updated = simulate_status_tick(
            agents, random.Random(0), later, status_change_probability=1.0
        )
        assert updated[0].last_active == later
        assert updated[1].last_active == fixed_now

    def test_no_status_change_with_zero_probability(self, sample_agents, fixed_now):
        """確率 0 ではステータスが変わらないことをテスト。"""
        updated = simulate_status_tick(
            sample_agents, random.Random(9), fixed_now, status_change_probability=0.0
        )
        assert [a.status for a in updated] == [a.status for a in sample_agents]

    def test_status_changes_are_valid(self, sample_agents, fixed_now):
        """入れ替わったステータスが既知の値であることをテスト。"""
        updated = simulate_status_tick(
            sample_agents, random.Random(9), fixed_now, status_change_probability=1.0
        )
        valid = {s.value for s in AgentStatus}
        assert all(a.status in valid for a in updated)
