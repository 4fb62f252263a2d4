"""音声コマンドの解釈。

書き起こしテキストをキーワードの部分一致で固定の意図に振り分ける。
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime

from src.models.agent import Agent
from src.models.voice import VoiceCommand, VoiceIntent

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE_THRESHOLD = 0.7

UNKNOWN_CONFIDENCE = 0.5
UNKNOWN_RESPONSE = "I didn't understand that command."


@dataclass
class IntentRule:
    """意図の判定ルール。

    keywords のいずれかの組（すべての語を含む）に一致すれば採用する。
    """

    intent: VoiceIntent
    keywords: tuple[tuple[str, ...], ...]
    confidence: float
    response: str

    def matches(self, text: str) -> bool:
        """小文字化済みテキストが一致するか判定する。"""
        return any(all(word in text for word in group) for group in self.keywords)


# 判定順（先に一致したものを採用）
INTENT_RULES: list[IntentRule] = [
    IntentRule(
        intent=VoiceIntent.SHOW_AGENT_STATUS,
        keywords=(("show", "status"),),
        confidence=0.9,
        response="Showing agent status dashboard.",
    ),
    IntentRule(
        intent=VoiceIntent.SCHEDULE_HANDOFF,
        keywords=(("schedule", "handoff"),),
        confidence=0.85,
        response="Scheduling agent handoff.",
    ),
    IntentRule(
        intent=VoiceIntent.CHECK_PROGRESS,
        keywords=(("progress",), ("how are we doing",)),
        confidence=0.88,
        response="Here's your project progress overview.",
    ),
    IntentRule(
        intent=VoiceIntent.RESOLVE_CONFLICT,
        keywords=(("resolve", "conflict"),),
        confidence=0.82,
        response="Initiating conflict resolution protocol.",
    ),
]

# 受理された意図ごとに切り替える画面
INTENT_VIEWS: dict[VoiceIntent, str] = {
    VoiceIntent.SHOW_AGENT_STATUS: "dashboard",
    VoiceIntent.CHECK_PROGRESS: "analytics",
    VoiceIntent.SCHEDULE_HANDOFF: "canvas",
    VoiceIntent.RESOLVE_CONFLICT: "risks",
}


def extract_agent_entities(text: str, agents: list[Agent]) -> list[str]:
    """テキスト中で言及されたエージェントIDを出現順に返す。

    表示名（"ui designer"）または役割名（"ui_designer"）で判定する。
    """
    found: list[tuple[int, str]] = []
    for agent in agents:
        candidates = (agent.name.lower(), str(agent.role).lower())
        positions = [text.find(c) for c in candidates if c and c in text]
        if positions:
            found.append((min(positions), agent.id))
    return [agent_id for _, agent_id in sorted(found)]


def interpret_transcript(
    transcript: str,
    agents: list[Agent] | None = None,
    now: datetime | None = None,
) -> VoiceCommand:
    """書き起こしテキストを解釈する。

    Args:
        transcript: 書き起こしテキスト
        agents: エンティティ抽出に使うエージェント一覧
        now: 受信時刻

    Returns:
        解釈結果（一致しなければ intent=unknown, confidence=0.5）
    """
    text = transcript.lower()
    intent = VoiceIntent.UNKNOWN
    confidence = UNKNOWN_CONFIDENCE
    response = UNKNOWN_RESPONSE
    for rule in INTENT_RULES:
        if rule.matches(text):
            intent = rule.intent
            confidence = rule.confidence
            response = rule.response
            break

    command = VoiceCommand(
        id=f"cmd-{uuid.uuid4().hex[:12]}",
        transcript=transcript,
        intent=intent,
        entities=extract_agent_entities(text, agents or []),
        confidence=confidence,
        timestamp=now or datetime.now(),
        response=response,
    )
    logger.debug(f"音声コマンドを解釈しました: {transcript!r} -> {intent.value}")
    return command


def is_command_accepted(
    command: VoiceCommand, threshold: float = DEFAULT_CONFIDENCE_THRESHOLD
) -> bool:
    """信頼度が閾値を超えるコマンドのみ受理する。"""
    return command.confidence > threshold


def target_view_for(command: VoiceCommand) -> str | None:
    """受理されたコマンドの遷移先画面を返す（unknown は None）。"""
    try:
        return INTENT_VIEWS.get(VoiceIntent(command.intent))
    except ValueError:
        return None
