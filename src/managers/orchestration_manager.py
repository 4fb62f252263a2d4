"""オーケストレーション状態の管理。

エージェント・インタラクション・リスク・シナジーの各コレクションを
単一の状態ストアとして所有し、すべての更新を 1 本のロックで直列化する。
各更新は現在のコレクションから新しいコレクションを計算して丸ごと置き換える。
"""

import asyncio
import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from src.config.projects import load_projects
from src.config.settings import Settings
from src.managers.canvas_layout import compute_canvas_layout, parse_canvas_mode
from src.managers.interaction_generator import (
    advance_interaction,
    append_interaction,
    create_interaction,
    create_seed_interactions,
    generate_interaction_tick,
)
from src.managers.risk_predictor import (
    compute_risk_metrics,
    predict_risks,
    transition_risk_status,
)
from src.managers.status_simulator import create_initial_agents, simulate_status_tick
from src.managers.synergy_analyzer import (
    allocate_resources,
    analyze_synergies,
    implement_synergy,
)
from src.managers.voice_interpreter import (
    interpret_transcript,
    is_command_accepted,
    target_view_for,
)
from src.models.agent import AgentStatus, find_agent
from src.models.canvas import CanvasLayout, CanvasMode
from src.models.interaction import (
    AgentInteraction,
    InteractionPriority,
    InteractionStatus,
    InteractionType,
)
from src.models.orchestration import (
    OrchestrationSnapshot,
    OrchestrationState,
    OrchestrationStats,
)
from src.models.project import Project
from src.models.risk import ProjectRisk, RiskStatus, round_half_up
from src.models.voice import VoiceCommand, VoiceIntent

logger = logging.getLogger(__name__)

# 音声コマンドから作成するインタラクション種別
VOICE_INTERACTION_TYPES: dict[VoiceIntent, InteractionType] = {
    VoiceIntent.SCHEDULE_HANDOFF: InteractionType.HANDOFF,
    VoiceIntent.RESOLVE_CONFLICT: InteractionType.CONFLICT_RESOLUTION,
}

# 同一時刻に発火する場合の実行順
TICK_ORDER = ("status", "interactions", "risks")


@dataclass
class VoiceCommandOutcome:
    """音声コマンドの処理結果。"""

    command: VoiceCommand
    accepted: bool
    target_view: str | None = None
    interaction: AgentInteraction | None = None


class OrchestrationManager:
    """オーケストレーション状態を所有し、更新を直列化するクラス。"""

    def __init__(
        self,
        settings: Settings,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] | None = None,
        projects: list[Project] | None = None,
    ) -> None:
        """OrchestrationManagerを初期化する。

        Args:
            settings: アプリケーション設定
            rng: 乱数ソース（省略時は settings.random_seed で生成）
            clock: 現在時刻を返す関数（省略時は datetime.now）
            projects: プロジェクト一覧（省略時は settings.projects_file から読み込む）
        """
        self.settings = settings
        self.rng = rng or random.Random(settings.random_seed)
        self._clock = clock or datetime.now
        self._projects = projects
        self._lock = asyncio.Lock()
        self._elapsed: dict[str, float] = {name: 0.0 for name in TICK_ORDER}
        self.state = OrchestrationState()
        self.initialize()

    def now(self) -> datetime:
        """現在時刻を返す。"""
        return self._clock()

    def initialize(self) -> None:
        """初期ロスター・サンプルデータ・派生データを構築する。"""
        now = self.now()
        if self._projects is not None:
            projects = [p.model_copy(deep=True) for p in self._projects]
        else:
            projects = load_projects(self.settings.projects_file)

        agents = create_initial_agents(self.rng, now)
        interactions = create_seed_interactions(now) if self.settings.seed_interactions else []
        risks = predict_risks(agents, self.rng, noise=self.settings.risk_noise)

        self.state = OrchestrationState(
            agents=agents,
            interactions=interactions[: self.settings.interaction_log_limit],
            risks=risks,
            risk_metrics=compute_risk_metrics(risks, self.rng),
            projects=projects,
            synergies=analyze_synergies(projects),
            allocations=allocate_resources(agents, projects, self.rng),
        )
        self._elapsed = {name: 0.0 for name in TICK_ORDER}
        logger.info(
            f"オーケストレーション状態を初期化しました: "
            f"agents={len(agents)}, projects={len(projects)}"
        )

    async def reset(self) -> None:
        """状態を初期化し直す。"""
        async with self._lock:
            self.initialize()

    # ========== 定期タスク ==========

    async def tick_status(self) -> None:
        """エージェント状態を 1 ティック進める。"""
        async with self._lock:
            self.state.agents = simulate_status_tick(
                self.state.agents,
                self.rng,
                self.now(),
                workload_delta=self.settings.workload_delta,
                efficiency_delta=self.settings.efficiency_delta,
                status_change_probability=self.settings.status_change_probability,
            )
            self.state.tick_count += 1

    async def tick_interactions(self) -> None:
        """インタラクション生成を 1 ティック進める。"""
        async with self._lock:
            self.state.interactions = generate_interaction_tick(
                self.state.agents,
                self.state.interactions,
                self.rng,
                self.now(),
                probability=self.settings.interaction_probability,
                limit=self.settings.interaction_log_limit,
            )
            self.state.tick_count += 1

    async def run_risk_analysis(self, delay_seconds: float | None = None) -> list[ProjectRisk]:
        """リスク分析を実行する。

        擬似的な分析時間はロックの外で待つため、その間も他の更新は進む。

        Args:
            delay_seconds: 擬似分析時間（省略時は settings.analysis_delay_seconds）

        Returns:
            再計算後のリスク一覧
        """
        delay = self.settings.analysis_delay_seconds if delay_seconds is None else delay_seconds
        if delay > 0:
            await asyncio.sleep(delay)

        async with self._lock:
            risks = predict_risks(
                self.state.agents,
                self.rng,
                noise=self.settings.risk_noise,
                previous=self.state.risks,
            )
            self.state.risks = risks
            self.state.risk_metrics = compute_risk_metrics(risks, self.rng)
            self.state.tick_count += 1
            logger.debug(
                f"リスク分析を実行しました: score={self.state.risk_metrics.overall_risk_score}"
            )
            return list(risks)

    async def advance(self, seconds: float) -> dict[str, int]:
        """シミュレーション時間を進め、期限の来たティックを順に実行する。

        タスクごとに経過時間を積算し、間隔ごとに発火させる。
        リスク分析は擬似待ち時間なしで実行する。

        Args:
            seconds: 進める秒数（0 以上）

        Returns:
            タスクごとの発火回数

        Raises:
            ValueError: seconds が負の場合
        """
        if seconds < 0:
            raise ValueError(f"seconds は 0 以上で指定してください: {seconds}")

        intervals = self.settings.get_tick_intervals()
        events: list[tuple[float, int, str]] = []
        fired: dict[str, int] = {}
        for order, name in enumerate(TICK_ORDER):
            interval = intervals[name]
            previous = self._elapsed[name]
            total = previous + seconds
            count = int(total // interval)
            self._elapsed[name] = total - count * interval
            fired[name] = count
            for k in range(1, count + 1):
                events.append((k * interval - previous, order, name))

        handlers = {
            "status": self.tick_status,
            "interactions": self.tick_interactions,
            "risks": lambda: self.run_risk_analysis(delay_seconds=0),
        }
        for _, _, name in sorted(events):
            await handlers[name]()

        logger.debug(f"シミュレーション時間を {seconds} 秒進めました: {fired}")
        return fired

    # ========== 集計 ==========

    def compute_stats(self) -> OrchestrationStats:
        """ダッシュボードの集計値を計算する。"""
        agents = self.state.agents
        efficiency = 0
        if agents:
            efficiency = round_half_up(sum(a.efficiency for a in agents) / len(agents))
        collaboration = round_half_up(len(self.state.interactions) * 10 + self.rng.random() * 20)
        return OrchestrationStats(
            active_agents=sum(1 for a in agents if a.status == AgentStatus.ACTIVE),
            completed_tasks=sum(a.total_tasks_completed for a in agents),
            efficiency=efficiency,
            collaboration_score=min(100, collaboration),
        )

    # ========== 選択・キャンバス ==========

    def select_agent(self, agent_id: str | None) -> bool:
        """エージェントを選択する（None で選択解除）。

        Returns:
            選択状態を更新した場合 True（未知の ID は False）
        """
        if agent_id is not None and find_agent(self.state.agents, agent_id) is None:
            return False
        self.state.selected_agent_id = agent_id
        return True

    def set_canvas_mode(self, mode: CanvasMode | str) -> bool:
        """キャンバスの表示モードを切り替える（不正値は無視）。"""
        resolved = parse_canvas_mode(mode)
        if resolved is None:
            return False
        self.state.canvas_mode = resolved
        return True

    def get_canvas_layout(self, mode: CanvasMode | str | None = None) -> CanvasLayout:
        """キャンバス配置を計算する（mode 省略時は現在のモード）。"""
        settings = self.settings
        return compute_canvas_layout(
            self.state.agents,
            self.state.interactions,
            self.state.canvas_mode if mode is None else mode,
            base_size=settings.agent_base_size,
            collaboration_radius=settings.collaboration_radius,
            conflict_radius=settings.conflict_radius,
            width=settings.canvas_width,
            height=settings.canvas_height,
        )

    # ========== ユーザー操作 ==========

    async def add_interaction(
        self,
        from_agent: str,
        to_agent: str,
        interaction_type: InteractionType | str,
        content: str | None = None,
        priority: InteractionPriority | str = InteractionPriority.MEDIUM,
    ) -> AgentInteraction:
        """インタラクションを明示的に追加する。

        Raises:
            ValueError: 送信元と宛先が同じ場合、または種類・優先度が不正な場合
        """
        async with self._lock:
            interaction = create_interaction(
                self.state.agents,
                from_agent,
                to_agent,
                interaction_type,
                self.now(),
                content=content,
                priority=priority,
            )
            self.state.interactions = append_interaction(
                self.state.interactions, interaction, self.settings.interaction_log_limit
            )
            logger.info(
                f"インタラクションを追加しました: {from_agent} -> {to_agent} ({interaction.type})"
            )
            return interaction

    async def advance_interaction(self, interaction_id: str) -> bool:
        """インタラクションの状態を 1 段階進める。"""
        async with self._lock:
            self.state.interactions, advanced = advance_interaction(
                self.state.interactions, interaction_id
            )
            return advanced

    async def update_risk_status(
        self, risk_id: str, new_status: RiskStatus | str
    ) -> ProjectRisk:
        """リスクの状態を進める。

        Raises:
            InvalidRiskTransitionError: 不正な遷移の場合
        """
        async with self._lock:
            self.state.risks = transition_risk_status(self.state.risks, risk_id, new_status)
            return next(r for r in self.state.risks if r.id == risk_id)

    async def implement_synergy(self, key: str) -> bool:
        """シナジーを実施済みにする。

        擬似処理時間はロックの外で待つ。
        """
        delay = self.settings.synergy_delay_seconds
        if delay > 0:
            await asyncio.sleep(delay)
        async with self._lock:
            self.state.synergies, matched = await implement_synergy(
                self.state.synergies, key, delay_seconds=0
            )
            return matched

    async def refresh_resource_allocation(self) -> None:
        """リソース配分推奨を現在のロスターで再計算する。"""
        async with self._lock:
            self.state.allocations = allocate_resources(
                self.state.agents, self.state.projects, self.rng
            )

    async def submit_voice_command(self, transcript: str) -> VoiceCommandOutcome:
        """音声コマンドを解釈して履歴に記録する。

        受理された handoff / conflict のコマンドでエージェントが 2 名以上
        言及されていれば、先頭 2 名の間に pending のインタラクションを作成する。
        """
        async with self._lock:
            command = interpret_transcript(transcript, self.state.agents, self.now())
            self.state.voice_commands = [command, *self.state.voice_commands][
                : self.settings.voice_command_log_limit
            ]
            accepted = is_command_accepted(command, self.settings.voice_confidence_threshold)
            outcome = VoiceCommandOutcome(command=command, accepted=accepted)
            if not accepted:
                logger.debug(f"信頼度不足の音声コマンドを無視します: {transcript!r}")
                return outcome

            outcome.target_view = target_view_for(command)
            interaction_type = VOICE_INTERACTION_TYPES.get(VoiceIntent(command.intent))
            if interaction_type is not None and len(command.entities) >= 2:
                interaction = create_interaction(
                    self.state.agents,
                    command.entities[0],
                    command.entities[1],
                    interaction_type,
                    self.now(),
                    status=InteractionStatus.PENDING,
                )
                self.state.interactions = append_interaction(
                    self.state.interactions, interaction, self.settings.interaction_log_limit
                )
                outcome.interaction = interaction
            logger.info(f"音声コマンドを受理しました: {command.intent}")
            return outcome

    # ========== エクスポート ==========

    def build_snapshot(self) -> OrchestrationSnapshot:
        """現在の状態からスナップショットを作成する。"""
        return OrchestrationSnapshot(
            agents=list(self.state.agents),
            interactions=list(self.state.interactions),
            risks=list(self.state.risks),
            stats=self.compute_stats(),
            timestamp=self.now(),
        )

    def export_snapshot(self, path: str | Path | None = None) -> Path:
        """スナップショットを JSON ファイルに書き出す。

        Args:
            path: 出力先（省略時は settings.export_dir 配下に日時付きで作成）

        Returns:
            書き出したファイルのパス

        Raises:
            OSError: 書き込みに失敗した場合
        """
        snapshot = self.build_snapshot()
        if path is None:
            filename = f"orchestration-report-{snapshot.timestamp:%Y%m%d-%H%M%S}.json"
            path = Path(self.settings.export_dir) / filename
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")
        logger.info(f"レポートを出力しました: {path}")
        return path

    @staticmethod
    def load_snapshot(path: str | Path) -> OrchestrationSnapshot:
        """書き出したスナップショットを読み込む。"""
        return OrchestrationSnapshot.model_validate_json(Path(path).read_text(encoding="utf-8"))
