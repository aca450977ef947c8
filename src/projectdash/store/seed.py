"""Initial dashboard data, loaded once at process start.

Three projects, five members and three tasks with fixed cross-references.
Test fixtures rely on these exact values.
"""

from __future__ import annotations

from datetime import date

from .entities import (
    Member,
    MemberRole,
    Project,
    ProjectCategory,
    ProjectPriority,
    ProjectStatus,
    Task,
    TaskPriority,
    TaskStatus,
)

SEED_PROJECTS: tuple[Project, ...] = (
    Project(
        id="p-001",
        name="E-commerce Platform",
        description="Plataforma de comercio electrónico con Next.js",
        status=ProjectStatus.IN_PROGRESS,
        progress=65,
        team_member_ids=("u-001", "u-002", "u-003"),
        category=ProjectCategory.WEB,
        priority=ProjectPriority.HIGH,
        created_at=date(2025, 10, 1),
    ),
    Project(
        id="p-002",
        name="Mobile App",
        description="Aplicación móvil con React Native",
        status=ProjectStatus.IN_REVIEW,
        progress=90,
        team_member_ids=("u-004", "u-005"),
        category=ProjectCategory.MOBILE,
        priority=ProjectPriority.MEDIUM,
        created_at=date(2025, 9, 15),
    ),
    Project(
        id="p-003",
        name="Design System",
        description="Librería de componentes reutilizables",
        status=ProjectStatus.COMPLETED,
        progress=100,
        team_member_ids=("u-001",),
        category=ProjectCategory.DESIGN,
        priority=ProjectPriority.LOW,
        created_at=date(2025, 8, 10),
    ),
)

SEED_MEMBERS: tuple[Member, ...] = (
    Member(
        user_id="u-001",
        name="María García",
        email="maria@example.com",
        role=MemberRole.FRONTEND_DEVELOPER,
        position="Líder de Frontend",
        birthdate=date(1995, 5, 20),
        phone="555-1234",
        project_id="p-001",
        is_active=True,
    ),
    Member(
        user_id="u-002",
        name="Juan Pérez",
        email="juan@example.com",
        role=MemberRole.BACKEND_DEVELOPER,
        position="Ingeniero de API",
        birthdate=date(1990, 11, 10),
        phone="555-5678",
        project_id="p-001",
        is_active=True,
    ),
    Member(
        user_id="u-003",
        name="Ana López",
        email="ana@example.com",
        role=MemberRole.UIUX_DESIGNER,
        position="Diseñadora Principal",
        birthdate=date(1998, 1, 25),
        phone="555-9012",
        project_id="p-001",
        is_active=False,
    ),
    Member(
        user_id="u-004",
        name="Carlos Ruiz",
        email="carlos@example.com",
        role=MemberRole.DEVOPS_ENGINEER,
        position="Arquitecto Cloud",
        birthdate=date(1985, 7, 3),
        phone="555-3456",
        project_id="p-002",
        is_active=True,
    ),
    Member(
        user_id="u-005",
        name="Laura Martínez",
        email="laura@example.com",
        role=MemberRole.PROJECT_MANAGER,
        position="Gerente de Proyectos",
        birthdate=date(1992, 3, 15),
        phone="555-7890",
        project_id="p-002",
        is_active=True,
    ),
)

SEED_TASKS: tuple[Task, ...] = (
    Task(
        id="t-001",
        description="Implementar autenticación",
        project_id="p-001",
        status=TaskStatus.IN_PROGRESS,
        priority=TaskPriority.HIGH,
        assignee_id="u-002",
        deadline=date(2025, 11, 15),
    ),
    Task(
        id="t-002",
        description="Diseñar pantalla de perfil",
        project_id="p-002",
        status=TaskStatus.PENDING,
        priority=TaskPriority.MEDIUM,
        assignee_id="u-003",
        deadline=date(2025, 11, 20),
    ),
    Task(
        id="t-003",
        description="Configurar CI/CD",
        project_id="p-001",
        status=TaskStatus.COMPLETED,
        priority=TaskPriority.LOW,
        assignee_id="u-004",
        deadline=date(2025, 11, 10),
    ),
)
