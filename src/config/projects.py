"""プロジェクト一覧の読み込み。

YAML ファイル（projects: のリスト）または組み込みのサンプル一覧を返す。
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from src.models.project import Project, ProjectPriority, ProjectStatus

logger = logging.getLogger(__name__)


DEFAULT_PROJECTS: list[Project] = [
    Project(
        id="proj-1",
        name="E-commerce Platform",
        status=ProjectStatus.ACTIVE,
        progress=65,
        priority=ProjectPriority.HIGH,
        agents_assigned=6,
        deadline="2024-03-15",
        type="web_app",
    ),
    Project(
        id="proj-2",
        name="Customer Portal",
        status=ProjectStatus.ACTIVE,
        progress=58,
        priority=ProjectPriority.HIGH,
        agents_assigned=4,
        deadline="2024-04-01",
        type="web_app",
    ),
    Project(
        id="proj-3",
        name="Mobile Banking App",
        status=ProjectStatus.PLANNING,
        progress=15,
        priority=ProjectPriority.MEDIUM,
        agents_assigned=3,
        deadline="2024-06-30",
        type="mobile_app",
    ),
    Project(
        id="proj-4",
        name="Analytics Dashboard",
        status=ProjectStatus.COMPLETED,
        progress=100,
        priority=ProjectPriority.LOW,
        agents_assigned=0,
        deadline="2024-01-31",
        type="dashboard",
    ),
]


def load_projects(projects_file: str | Path | None = None) -> list[Project]:
    """プロジェクト一覧を読み込む。

    Args:
        projects_file: YAML ファイルのパス（None の場合は組み込みのサンプル）

    Returns:
        プロジェクトのリスト

    Raises:
        FileNotFoundError: ファイルが存在しない場合
        ValueError: YAML の形式が不正な場合
    """
    if projects_file is None:
        return [p.model_copy(deep=True) for p in DEFAULT_PROJECTS]

    path = Path(projects_file)
    if not path.exists():
        raise FileNotFoundError(f"プロジェクトファイルが見つかりません: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"プロジェクトファイルの解析に失敗しました: {path}: {e}") from e

    entries = data.get("projects", []) if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise ValueError(f"projects はリストで指定してください: {path}")

    try:
        projects = [Project.model_validate(entry) for entry in entries]
    except ValidationError as e:
        raise ValueError(f"プロジェクト定義が不正です: {path}: {e}") from e

    logger.info(f"プロジェクトを {len(projects)} 件読み込みました: {path}")
    return projects
