"""Tests for RelationalStore create/update/delete operations."""

from datetime import date

import pytest

from projectdash.exceptions import NotFoundError, ValidationError
from projectdash.store import (
    MemberInput,
    MemberRole,
    ProjectCategory,
    ProjectInput,
    ProjectPriority,
    ProjectStatus,
    RelationalStore,
    TaskInput,
    TaskPriority,
    TaskStatus,
)


def _member_input(**overrides):
    values = dict(
        name="Pedro Sánchez",
        email="pedro@example.com",
        position="QA Lead",
        birthdate="1993-04-12",
        phone="555-0000",
        role="Backend Developer",
        project_id="p-002",
        is_active=True,
    )
    values.update(overrides)
    return MemberInput(**values)


class TestCreateProject:
    """create_project forces the initial state and validates required fields."""

    def test_round_trip(self, store):
        data = ProjectInput(
            name="Landing Page",
            description="Marketing site",
            category="marketing",
            priority="urgent",
            team_member_ids=["u-004"],
        )
        created = store.create_project(data)

        fetched = store.get_project(created.id)
        assert fetched == created
        assert fetched.name == "Landing Page"
        assert fetched.description == "Marketing site"
        assert fetched.category is ProjectCategory.MARKETING
        assert fetched.priority is ProjectPriority.URGENT
        assert fetched.team_member_ids == ("u-004",)
        assert fetched.status is ProjectStatus.PLANNED
        assert fetched.progress == 0
        assert fetched.created_at == date(2025, 10, 20)

    def test_caller_status_and_progress_are_ignored(self, store):
        data = ProjectInput(
            name="X", category="web", priority="low", status="Completed", progress=80
        )
        created = store.create_project(data)
        assert created.status is ProjectStatus.PLANNED
        assert created.progress == 0

    def test_fresh_id_is_unique(self, store):
        created = store.create_project(ProjectInput(name="X", category="web", priority="low"))
        assert created.id not in {"p-001", "p-002", "p-003"}
        assert len(store.list_projects()) == 4

    def test_default_ids_keep_prefix(self):
        store = RelationalStore.seeded()
        created = store.create_project(ProjectInput(name="X", category="web", priority="low"))
        assert created.id.startswith("p-")

    @pytest.mark.parametrize("field", ["name", "category", "priority"])
    def test_required_fields(self, store, field):
        values = dict(name="X", category="web", priority="low")
        values[field] = ""
        with pytest.raises(ValidationError) as exc:
            store.create_project(ProjectInput(**values))
        assert exc.value.field == field
        assert len(store.list_projects()) == 3

    def test_unknown_category_rejected(self, store):
        with pytest.raises(ValidationError, match="unknown value"):
            store.create_project(ProjectInput(name="X", category="games", priority="low"))

    def test_unknown_team_member_rejected(self, store):
        with pytest.raises(ValidationError) as exc:
            store.create_project(
                ProjectInput(name="X", category="web", priority="low", team_member_ids=["u-999"])
            )
        assert exc.value.field == "team_member_ids"

    def test_duplicate_team_members_collapsed(self, store):
        created = store.create_project(
            ProjectInput(
                name="X", category="web", priority="low", team_member_ids=["u-001", "u-002", "u-001"]
            )
        )
        assert created.team_member_ids == ("u-001", "u-002")


class TestUpdateProject:
    def test_update_keeps_id_and_created_at(self, store):
        updated = store.update_project(
            "p-002",
            ProjectInput(
                name="Mobile App v2",
                category="mobile",
                priority="high",
                status="Completed",
                progress=100,
                team_member_ids=["u-004"],
            ),
        )
        assert updated.id == "p-002"
        assert updated.created_at == date(2025, 9, 15)
        assert updated.status is ProjectStatus.COMPLETED
        assert updated.progress == 100
        assert store.get_project("p-002") == updated

    def test_progress_out_of_range(self, store):
        with pytest.raises(ValidationError, match="between 0 and 100"):
            store.update_project(
                "p-001", ProjectInput(name="X", category="web", priority="low", progress=101)
            )

    def test_unknown_id(self, store):
        with pytest.raises(NotFoundError):
            store.update_project("p-404", ProjectInput(name="X", category="web", priority="low"))


class TestMembers:
    def test_create_member(self, store):
        member = store.create_member(_member_input())
        assert member.user_id not in {"u-001", "u-002", "u-003", "u-004", "u-005"}
        assert member.role is MemberRole.BACKEND_DEVELOPER
        assert member.birthdate == date(1993, 4, 12)
        assert store.get_member(member.user_id) == member

    def test_empty_name_rejected(self, store):
        before = store.snapshot()
        with pytest.raises(ValidationError):
            store.create_member(
                MemberInput(name="", email="x@x.com", position="Dev", birthdate="2000-01-01")
            )
        assert len(store.list_members()) == 5
        assert store.snapshot() == before

    @pytest.mark.parametrize("field", ["name", "email", "position"])
    def test_required_text_fields(self, store, field):
        with pytest.raises(ValidationError) as exc:
            store.create_member(_member_input(**{field: "   "}))
        assert exc.value.field == field

    @pytest.mark.parametrize("birthdate", ["", "2000-02-30", "not a date", None])
    def test_invalid_birthdate(self, store, birthdate):
        with pytest.raises(ValidationError) as exc:
            store.create_member(_member_input(birthdate=birthdate))
        assert exc.value.field == "birthdate"

    def test_unknown_project_rejected(self, store):
        with pytest.raises(ValidationError) as exc:
            store.create_member(_member_input(project_id="p-999"))
        assert exc.value.field == "project_id"

    def test_blank_project_means_unassigned(self, store):
        member = store.create_member(_member_input(project_id=""))
        assert member.project_id is None

    def test_update_replaces_record(self, store):
        updated = store.update_member(
            "u-003", _member_input(name="Ana L.", is_active=True, project_id=None)
        )
        assert updated.user_id == "u-003"
        assert updated.name == "Ana L."
        assert updated.email == "pedro@example.com"
        assert updated.project_id is None
        assert store.get_member("u-003") == updated

    def test_update_unknown_id(self, store):
        with pytest.raises(NotFoundError) as exc:
            store.update_member("u-404", _member_input())
        assert exc.value.details == {"entity": "member", "id": "u-404"}

    def test_delete_unknown_id(self, store):
        with pytest.raises(NotFoundError):
            store.delete_member("u-404")


class TestTasks:
    def test_create_task_scenario(self, store):
        created = store.create_task(
            TaskInput(
                description="Review PR",
                project_id="p-002",
                status="Pending",
                priority="Alta",
                assignee_id=None,
                deadline="2025-12-01",
            )
        )
        assert created.id not in {"t-001", "t-002", "t-003"}
        assert created.priority is TaskPriority.HIGH
        assert created.status is TaskStatus.PENDING
        assert created.deadline == date(2025, 12, 1)
        assert len(store.list_tasks()) == 4

    @pytest.mark.parametrize("field", ["description", "project_id", "deadline"])
    def test_required_fields(self, store, field):
        values = dict(description="Review PR", project_id="p-002", deadline="2025-12-01")
        values[field] = ""
        with pytest.raises(ValidationError) as exc:
            store.create_task(TaskInput(**values))
        assert exc.value.field == field
        assert len(store.list_tasks()) == 3

    def test_unknown_project_rejected(self, store):
        with pytest.raises(ValidationError) as exc:
            store.create_task(
                TaskInput(description="Orphan", project_id="p-999", deadline="2025-12-01")
            )
        assert exc.value.field == "project_id"

    def test_unknown_assignee_rejected(self, store):
        with pytest.raises(ValidationError) as exc:
            store.create_task(
                TaskInput(
                    description="X", project_id="p-001", deadline="2025-12-01", assignee_id="u-999"
                )
            )
        assert exc.value.field == "assignee_id"

    def test_any_status_transition_allowed(self, store):
        for status in ("Blocked", "Pending", "Completed", "InProgress"):
            updated = store.update_task(
                "t-003",
                TaskInput(
                    description="Configurar CI/CD",
                    project_id="p-001",
                    deadline="2025-11-10",
                    status=status,
                ),
            )
            assert updated.status is TaskStatus.parse(status)

    def test_update_replaces_record(self, store):
        updated = store.update_task(
            "t-001",
            TaskInput(description="Auth v2", project_id="p-002", deadline=date(2026, 1, 5)),
        )
        assert updated.id == "t-001"
        assert updated.project_id == "p-002"
        assert updated.assignee_id is None
        assert updated.priority is TaskPriority.MEDIUM

    def test_update_unknown_id(self, store):
        with pytest.raises(NotFoundError):
            store.update_task("t-404", TaskInput(description="X", project_id="p-001", deadline="2025-12-01"))

    def test_delete_task_is_a_leaf(self, store):
        before = store.snapshot()
        store.delete_task("t-002")
        after = store.snapshot()
        assert [t.id for t in after.tasks] == ["t-001", "t-003"]
        assert after.projects == before.projects
        assert after.members == before.members

    def test_delete_unknown_task(self, store):
        with pytest.raises(NotFoundError):
            store.delete_task("t-404")


class TestInitialData:
    def test_duplicate_ids_rejected(self):
        seeded = RelationalStore.seeded()
        project = seeded.get_project("p-001")
        with pytest.raises(ValidationError, match="duplicated"):
            RelationalStore(projects=[project, project])

    def test_dangling_references_rejected(self):
        seeded = RelationalStore.seeded()
        with pytest.raises(ValidationError, match="missing project"):
            RelationalStore(tasks=seeded.list_tasks())
