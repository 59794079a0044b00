import logging
from typing import Optional
from .rows import (
    group_from_row,
    mesh_from_row,
    quiz_from_rows,
    result_to_dict,
    submission_from_row,
)
from ..domain.model import Quiz, Submission
from ..domain.results import ReferenceMaps, aggregate_results, collect_reference_ids
from ..repositories.catalog_repository import CatalogRepository
from ..repositories.quiz_repository import QuizRepository
from ..repositories.submission_repository import SubmissionRepository

logger = logging.getLogger(__name__)

class ResultsService:
    """Reads a quiz, its submissions and the catalog rows they reference, then aggregates."""

    def __init__(
        self,
        quizzes: QuizRepository,
        submissions: SubmissionRepository,
        catalog: CatalogRepository,
    ) -> None:
        self.quizzes = quizzes
        self.submissions = submissions
        self.catalog = catalog

    def prefetch_references(self, quiz: Quiz, submissions: list[Submission]) -> ReferenceMaps:
        # one batched read per table, however many submissions there are
        mesh_ids, group_ids = collect_reference_ids(quiz, submissions)
        meshes = [mesh_from_row(r) for r in self.catalog.get_meshes_by_ids(mesh_ids)] if mesh_ids else []
        groups = [group_from_row(r) for r in self.catalog.get_groups_by_ids(group_ids)] if group_ids else []
        logger.debug(
            "Quiz %s: resolved %d/%d meshes, %d/%d groups",
            quiz.id, len(meshes), len(mesh_ids), len(groups), len(group_ids),
        )
        return ReferenceMaps.build(meshes, groups)

    def get_results(self, quiz_id: str) -> Optional[list[dict]]:
        res = self.quizzes.get_quiz_with_questions(quiz_id)
        if not res:
            return None
        quiz = quiz_from_rows(*res)
        submissions = [submission_from_row(r) for r in self.submissions.get_submissions_by_quiz(quiz_id)]
        refs = self.prefetch_references(quiz, submissions)
        return [result_to_dict(r) for r in aggregate_results(quiz, submissions, refs)]
