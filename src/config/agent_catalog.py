"""エージェントの役割カタログ。

11 種類の役割ごとに表示名・性格の初期値・スキル・担当タスク例を定義する。
"""

from dataclasses import dataclass, field

from src.models.agent import AgentPersonality, AgentRole


@dataclass
class RoleDefinition:
    """役割の定義。"""

    name: str
    """表示名"""

    description: str
    """役割の説明"""

    personality: AgentPersonality
    """性格の初期値"""

    capabilities: list[str] = field(default_factory=list)
    """保有スキル"""

    tasks: list[str] = field(default_factory=list)
    """担当タスクの例（現在タスクの初期値に使用）"""


DEFAULT_TASK = "Working on assigned tasks"


AGENT_DEFINITIONS: dict[AgentRole, RoleDefinition] = {
    AgentRole.VISIONARY: RoleDefinition(
        name="Visionary",
        description="Sets the big picture vision and strategic direction",
        personality=AgentPersonality(
            traits=["optimistic", "big_picture", "inspirational"],
            communication_style="enthusiastic",
            stress_responses=["tunnel_vision", "over_promising"],
            working_style="collaborative",
            collaboration="leader",
            decision_making="intuitive",
        ),
        capabilities=["Strategy Planning", "Vision Setting", "Innovation", "Leadership"],
        tasks=[
            "Developing strategic roadmap for Q2",
            "Analyzing market opportunities",
            "Reviewing product vision alignment",
            "Planning innovation initiatives",
        ],
    ),
    AgentRole.PRODUCT_MANAGER: RoleDefinition(
        name="Product Manager",
        description="Manages product roadmap and stakeholder requirements",
        personality=AgentPersonality(
            traits=["analytical", "methodical", "diplomatic"],
            communication_style="diplomatic",
            stress_responses=["scope_creep", "analysis_paralysis"],
            working_style="iterative",
            collaboration="mediator",
            decision_making="data_driven",
        ),
        capabilities=[
            "Requirement Analysis",
            "Roadmap Planning",
            "Stakeholder Management",
            "Prioritization",
        ],
        tasks=[
            "Prioritizing backlog items",
            "Gathering stakeholder feedback",
            "Updating product requirements",
            "Coordinating with development team",
        ],
    ),
    AgentRole.UI_DESIGNER: RoleDefinition(
        name="UI Designer",
        description="Creates visual designs and user interfaces",
        personality=AgentPersonality(
            traits=["creative", "detail_oriented", "innovative"],
            communication_style="supportive",
            stress_responses=["perfectionism", "rushed_decisions"],
            working_style="iterative",
            collaboration="specialist",
            decision_making="intuitive",
        ),
        capabilities=["Visual Design", "Prototyping", "Design Systems", "Brand Consistency"],
        tasks=[
            "Creating component library",
            "Designing user interface mockups",
            "Updating design system",
            "Conducting design reviews",
        ],
    ),
    AgentRole.UX_DESIGNER: RoleDefinition(
        name="UX Designer",
        description="Designs user experiences and interaction flows",
        personality=AgentPersonality(
            traits=["analytical", "collaborative", "adaptable"],
            communication_style="analytical",
            stress_responses=["analysis_paralysis", "perfectionism"],
            working_style="collaborative",
            collaboration="facilitator",
            decision_making="data_driven",
        ),
        capabilities=[
            "User Research",
            "Information Architecture",
            "Interaction Design",
            "Usability Testing",
        ],
    ),
    AgentRole.FRONTEND_DEVELOPER: RoleDefinition(
        name="Frontend Developer",
        description="Implements user interfaces and client-side logic",
        personality=AgentPersonality(
            traits=["methodical", "detail_oriented", "innovative"],
            communication_style="precise",
            stress_responses=["perfectionism", "bottlenecking"],
            working_style="parallel",
            collaboration="specialist",
            decision_making="deliberate",
        ),
        capabilities=[
            "React/Vue Development",
            "CSS/Styling",
            "Performance Optimization",
            "Responsive Design",
        ],
        tasks=[
            "Implementing React components",
            "Optimizing bundle performance",
            "Adding responsive layouts",
            "Writing unit tests",
        ],
    ),
    AgentRole.BACKEND_DEVELOPER: RoleDefinition(
        name="Backend Developer",
        description="Builds server-side logic and database systems",
        personality=AgentPersonality(
            traits=["analytical", "methodical", "focused"],
            communication_style="precise",
            stress_responses=["perfectionism", "isolation"],
            working_style="sequential",
            collaboration="specialist",
            decision_making="data_driven",
        ),
        capabilities=["API Development", "Database Design", "Security", "Scalability"],
        tasks=[
            "Building REST API endpoints",
            "Optimizing database queries",
            "Implementing authentication",
            "Setting up monitoring",
        ],
    ),
    AgentRole.QA_ENGINEER: RoleDefinition(
        name="QA Engineer",
        description="Tests quality and identifies issues",
        personality=AgentPersonality(
            traits=["detail_oriented", "skeptical", "thorough"],
            communication_style="precise",
            stress_responses=["perfectionism", "bottlenecking"],
            working_style="methodical",
            collaboration="supporter",
            decision_making="deliberate",
        ),
        capabilities=[
            "Testing Strategy",
            "Bug Detection",
            "Quality Assurance",
            "Test Automation",
        ],
        tasks=[
            "Writing automated tests",
            "Performing regression testing",
            "Reviewing code quality",
            "Testing user workflows",
        ],
    ),
    AgentRole.DEVOPS_ENGINEER: RoleDefinition(
        name="DevOps Engineer",
        description="Manages deployment and infrastructure",
        personality=AgentPersonality(
            traits=["methodical", "focused", "adaptable"],
            communication_style="direct",
            stress_responses=["isolation", "bottlenecking"],
            working_style="parallel",
            collaboration="specialist",
            decision_making="rapid",
        ),
        capabilities=["CI/CD", "Infrastructure", "Monitoring", "Security"],
    ),
    AgentRole.PROJECT_MANAGER: RoleDefinition(
        name="Project Manager",
        description="Coordinates timelines and manages resources",
        personality=AgentPersonality(
            traits=["diplomatic", "methodical", "collaborative"],
            communication_style="diplomatic",
            stress_responses=["scope_creep", "rushed_decisions"],
            working_style="collaborative",
            collaboration="facilitator",
            decision_making="consensus_based",
        ),
        capabilities=[
            "Timeline Management",
            "Resource Allocation",
            "Risk Management",
            "Communication",
        ],
    ),
    AgentRole.MARKETING_SPECIALIST: RoleDefinition(
        name="Marketing Specialist",
        description="Creates marketing strategies and campaigns",
        personality=AgentPersonality(
            traits=["creative", "inspirational", "adaptable"],
            communication_style="enthusiastic",
            stress_responses=["over_promising", "rushed_decisions"],
            working_style="iterative",
            collaboration="supporter",
            decision_making="intuitive",
        ),
        capabilities=[
            "Campaign Strategy",
            "Content Creation",
            "Market Analysis",
            "Brand Management",
        ],
    ),
    AgentRole.DATA_ANALYST: RoleDefinition(
        name="Data Analyst",
        description="Analyzes data and provides insights",
        personality=AgentPersonality(
            traits=["analytical", "methodical", "thorough"],
            communication_style="analytical",
            stress_responses=["analysis_paralysis", "perfectionism"],
            working_style="sequential",
            collaboration="specialist",
            decision_making="data_driven",
        ),
        capabilities=["Data Analysis", "Reporting", "Insights Generation", "Metrics Tracking"],
    ),
}


def agent_id_for_role(role: AgentRole | str) -> str:
    """役割からエージェントIDを生成する（agent-{role}）。"""
    value = role.value if isinstance(role, AgentRole) else str(role)
    return f"agent-{value}"


def get_role_definition(role: AgentRole | str) -> RoleDefinition | None:
    """役割の定義を取得する。

    Args:
        role: 役割（enum または文字列）

    Returns:
        定義、未知の役割の場合は None
    """
    try:
        return AGENT_DEFINITIONS[AgentRole(role)]
    except ValueError:
        return None
