import os
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

# Settings() needs these at import time; nothing talks to Supabase in tests
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")

from fastapi.testclient import TestClient

from anatomy_quiz.api.v1 import deps
from anatomy_quiz.main import app
from anatomy_quiz.repositories.quiz_repository import QuizRepository
from anatomy_quiz.services.catalog_service import CatalogService
from anatomy_quiz.services.quiz_service import QuizService
from anatomy_quiz.services.results_cache import ResultsCache
from anatomy_quiz.services.results_service import ResultsService
from anatomy_quiz.services.rows import to_datetime
from anatomy_quiz.services.submission_service import SubmissionService

API = "/api/v1"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class InMemoryQuizRepository:
    def __init__(self) -> None:
        self.quizzes: dict[str, dict] = {}
        self.questions: dict[str, list[dict]] = {}

    def list_quizzes(self, study_year=None, scheduled_between=None):
        rows = list(self.quizzes.values())
        if study_year is not None:
            rows = [r for r in rows if r.get("study_year") == study_year]
        if scheduled_between is not None:
            start, end = scheduled_between
            rows = [
                r for r in rows
                if r.get("scheduled_at") and start <= to_datetime(r["scheduled_at"]) < end
            ]
        return sorted(rows, key=lambda r: r["updated_at"], reverse=True)

    def get_quiz_with_questions(self, quiz_id):
        if quiz_id not in self.quizzes:
            return None
        return self.quizzes[quiz_id], sorted(self.questions.get(quiz_id, []), key=lambda q: q["position"])

    def create_quiz(self, fields, questions):
        quiz_id = str(uuid.uuid4())
        self.quizzes[quiz_id] = {"id": quiz_id, "created_at": _now(), "updated_at": _now(), **fields}
        self.questions[quiz_id] = QuizRepository._question_rows(quiz_id, questions)
        return quiz_id

    def update_quiz(self, quiz_id, fields, questions):
        self.quizzes[quiz_id].update(fields, updated_at=_now())
        if questions is not None:
            self.questions[quiz_id] = QuizRepository._question_rows(quiz_id, questions)

    def delete_quiz(self, quiz_id):
        self.quizzes.pop(quiz_id, None)
        self.questions.pop(quiz_id, None)


class InMemorySubmissionRepository:
    def __init__(self) -> None:
        self.rows: list[dict] = []

    def create_submission(self, row):
        stored = {"id": str(uuid.uuid4()), **row}
        self.rows.append(stored)
        return stored

    def list_submissions(self, quiz_id=None, student_id=None):
        return [
            r for r in self.rows
            if (quiz_id is None or r["quiz_id"] == quiz_id)
            and (student_id is None or r.get("student_id") == student_id)
        ]

    def get_submissions_by_quiz(self, quiz_id):
        return self.list_submissions(quiz_id=quiz_id)


class InMemoryCatalogRepository:
    def __init__(self) -> None:
        self.meshes: list[dict] = []
        self.groups: list[dict] = []
        self.batch_calls: list[tuple[str, set]] = []

    def add_group(self, group_name, group_id=None):
        row = {"id": group_id or str(uuid.uuid4()), "group_name": group_name, "description": None, "default_study_year": None}
        self.groups.append(row)
        return row["id"]

    def add_mesh(self, display_name, group_ids=(), mesh_id=None, mesh_name=None):
        row = {
            "id": mesh_id or str(uuid.uuid4()),
            "mesh_name": mesh_name or display_name.replace(" ", "_"),
            "display_name": display_name,
            "organ_group_ids": list(group_ids),
            "default_study_year": None,
        }
        self.meshes.append(row)
        return row["id"]

    def search_meshes(self, search, mesh_name, limit):
        rows = self.meshes
        if search:
            s = search.lower()
            rows = [r for r in rows if s in r["display_name"].lower() or s in r["mesh_name"].lower()]
        if mesh_name:
            rows = [r for r in rows if r["mesh_name"] == mesh_name]
        return rows[:limit]

    def create_mesh(self, row):
        stored = {"id": str(uuid.uuid4()), **row}
        self.meshes.append(stored)
        return stored

    def search_groups(self, search, limit):
        rows = self.groups
        if search:
            rows = [r for r in rows if search.lower() in r["group_name"].lower()]
        return rows[:limit]

    def get_meshes_by_ids(self, ids):
        ids = set(ids)
        self.batch_calls.append(("meshes", ids))
        return [r for r in self.meshes if r["id"] in ids]

    def get_groups_by_ids(self, ids):
        ids = set(ids)
        self.batch_calls.append(("groups", ids))
        return [r for r in self.groups if r["id"] in ids]


@pytest.fixture
def repos():
    return SimpleNamespace(
        quizzes=InMemoryQuizRepository(),
        submissions=InMemorySubmissionRepository(),
        catalog=InMemoryCatalogRepository(),
    )


@pytest.fixture
def client(repos):
    app.dependency_overrides[deps.get_quiz_service] = lambda: QuizService(repos.quizzes)
    app.dependency_overrides[deps.get_submission_service] = lambda: SubmissionService(repos.submissions, repos.quizzes)
    app.dependency_overrides[deps.get_catalog_service] = lambda: CatalogService(repos.catalog, search_limit=50)
    app.dependency_overrides[deps.get_results_service] = lambda: ResultsService(
        repos.quizzes, repos.submissions, repos.catalog
    )
    app.dependency_overrides[deps.get_results_cache] = lambda: ResultsCache(None, ttl_seconds=60)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
