"""設定モジュール。"""

from .agent_catalog import AGENT_DEFINITIONS, RoleDefinition, get_role_definition
from .projects import DEFAULT_PROJECTS, load_projects
from .settings import Settings, load_settings

__all__ = [
    "AGENT_DEFINITIONS",
    "DEFAULT_PROJECTS",
    "RoleDefinition",
    "Settings",
    "get_role_definition",
    "load_projects",
    "load_settings",
]
