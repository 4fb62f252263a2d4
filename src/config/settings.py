"""設定管理モジュール。"""

import os

from pydantic import ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings


def get_env_file() -> str | None:
    """設定用 .env ファイルのパスを取得する。

    ORCH_ENV_FILE 環境変数が設定されていて、そのファイルが存在する場合に返す。

    Returns:
        .env ファイルのパス（存在する場合）、または None
    """
    env_file = os.getenv("ORCH_ENV_FILE")
    if env_file and os.path.exists(env_file):
        return env_file
    return None


class Settings(BaseSettings):
    """オーケストレーションエンジンの設定。

    環境変数で上書き可能。プレフィックスは ORCH_。
    例: ORCH_STATUS_TICK_SECONDS=5

    優先順位:
    1. 環境変数（最優先）
    2. ORCH_ENV_FILE で指定された .env ファイル
    3. デフォルト値
    """

    model_config = ConfigDict(
        env_prefix="ORCH_",
        env_file=get_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ティック間隔
    status_tick_seconds: float = 3.0
    """ステータスシミュレーターの実行間隔（秒）"""

    interaction_tick_seconds: float = 3.0
    """インタラクション生成の実行間隔（秒）"""

    risk_tick_seconds: float = 30.0
    """リスク予測の再実行間隔（秒）"""

    # シミュレーション設定
    status_change_probability: float = Field(
        default=0.2, description="1 ティックでステータスが入れ替わる確率"
    )
    interaction_probability: float = Field(
        default=0.3, description="1 ティックでインタラクションが生成される確率"
    )
    workload_delta: float = Field(default=10.0, description="ワークロードの最大変動幅")
    efficiency_delta: float = Field(default=5.0, description="効率の最大変動幅")
    risk_noise: int = Field(default=5, ge=0, description="リスク確率・影響度の最大ノイズ")

    random_seed: int | None = None
    """乱数シード（None の場合は非決定的）"""

    seed_interactions: bool = True
    """初期化時にサンプルのインタラクションを投入するか"""

    # 保持件数
    interaction_log_limit: int = Field(default=10, ge=1)
    """インタラクションログの保持件数（新しい順）"""

    voice_command_log_limit: int = Field(default=10, ge=1)
    """音声コマンド履歴の保持件数"""

    voice_confidence_threshold: float = 0.7
    """音声コマンドを受理する信頼度の下限（この値より大きい場合のみ受理）"""

    # 擬似処理時間
    analysis_delay_seconds: float = Field(default=2.0, ge=0)
    """リスク分析の擬似処理時間（0 で無効）"""

    synergy_delay_seconds: float = Field(default=1.5, ge=0)
    """シナジー実施の擬似処理時間（0 で無効）"""

    # キャンバス設定
    canvas_width: int = 1200
    canvas_height: int = 800
    canvas_padding: int = 50
    agent_base_size: float = 60.0
    """エージェントノードの基本サイズ（px）"""

    collaboration_radius: float = 150.0
    """コラボレーションゾーンの半径（px）"""

    conflict_radius: float = 100.0
    """コンフリクトゾーンの半径（px）"""

    # プロジェクト・エクスポート
    projects_file: str | None = None
    """プロジェクト一覧 YAML のパス（None の場合は組み込みのサンプル）"""

    export_dir: str = ".orchestration-reports"
    """レポート出力ディレクトリ"""

    @field_validator(
        "status_change_probability",
        "interaction_probability",
        "voice_confidence_threshold",
    )
    @classmethod
    def validate_probability(cls, value: float) -> float:
        """確率値が 0.0〜1.0 の範囲にあることを検証する。"""
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"0.0〜1.0 の範囲で指定してください: {value}")
        return value

    @field_validator("status_tick_seconds", "interaction_tick_seconds", "risk_tick_seconds")
    @classmethod
    def validate_interval(cls, value: float) -> float:
        """ティック間隔が正の値であることを検証する。"""
        if value <= 0:
            raise ValueError(f"ティック間隔は正の値で指定してください: {value}")
        return value

    def get_tick_intervals(self) -> dict[str, float]:
        """周期タスク名と実行間隔のマッピングを返す。"""
        return {
            "status": self.status_tick_seconds,
            "interactions": self.interaction_tick_seconds,
            "risks": self.risk_tick_seconds,
        }


def load_settings(env_file: str | os.PathLike[str] | None = None) -> Settings:
    """指定した .env を優先して Settings を生成する。

    Args:
        env_file: .env ファイルのパス（None の場合は ORCH_ENV_FILE を参照する）

    Returns:
        読み込み済み Settings インスタンス
    """
    env_file = env_file or get_env_file()
    if env_file and os.path.exists(env_file):
        return Settings(_env_file=str(env_file))
    return Settings(_env_file=None)
