"""Per-question statistics for a quiz and its submissions.

Everything here is pure: the caller reads the quiz, its submissions and the
referenced catalog rows, and this module turns them into ``QuestionResult``
objects. Missing catalog rows and malformed answers degrade to placeholders or
are left out of the tallies; they never abort the computation.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .ids import is_valid_id, short_id
from .model import (
    AnswerBreakdown,
    ChoiceQuestion,
    MeshCatalogItem,
    MultipleChoiceQuestion,
    OrganGroup,
    Question,
    QuestionResult,
    Quiz,
    SelectOrganQuestion,
    ShortAnswerQuestion,
    Submission,
    SubmissionAnswer,
    TrueFalseQuestion,
)

logger = logging.getLogger(__name__)

NO_ANSWER = "No Answer"
UNKNOWN_TARGET_MESH = "Unknown Target Mesh"
UNKNOWN_TARGET_GROUP = "Unknown Target Group"


def unknown_mesh_label(mesh_id: str) -> str:
    return f"Unknown Mesh ({short_id(mesh_id)})"


# --- reference prefetch ---

def has_target(question: SelectOrganQuestion) -> bool:
    """A select-organ question with no usable target counts nothing as correct."""
    return question.target_type in ("mesh", "group") and bool(question.target_id)


def collect_reference_ids(quiz: Quiz, submissions: Iterable[Submission]) -> Tuple[Set[str], Set[str]]:
    """
    Returns (mesh_ids, group_ids) that the results for this quiz will look up.

    Mesh ids come from mesh-target questions and from every clicked mesh in the
    submissions; group ids come from group-target questions. Ids that are not
    well formed are dropped here so the batch reads never see them.
    """
    mesh_ids: Set[str] = set()
    group_ids: Set[str] = set()

    for question in quiz.questions:
        if not isinstance(question, SelectOrganQuestion) or not has_target(question):
            continue
        if not is_valid_id(question.target_id):
            logger.debug("Dropping malformed target id %r from prefetch", question.target_id)
            continue
        if question.target_type == "mesh":
            mesh_ids.add(question.target_id)
        else:
            group_ids.add(question.target_id)

    for submission in submissions:
        for answer in submission.answers:
            if not answer.clicked_mesh_id:
                continue
            if is_valid_id(answer.clicked_mesh_id):
                mesh_ids.add(answer.clicked_mesh_id)
            else:
                logger.debug("Dropping malformed clicked mesh id %r from prefetch", answer.clicked_mesh_id)

    return mesh_ids, group_ids


@dataclass(frozen=True)
class ReferenceMaps:
    meshes: Dict[str, MeshCatalogItem] = field(default_factory=dict)
    groups: Dict[str, OrganGroup] = field(default_factory=dict)

    @classmethod
    def build(cls, meshes: Iterable[MeshCatalogItem], groups: Iterable[OrganGroup]) -> "ReferenceMaps":
        return cls(
            meshes={m.id: m for m in meshes},
            groups={g.id: g for g in groups},
        )

    def mesh_display_name(self, mesh_id: str) -> str:
        mesh = self.meshes.get(mesh_id)
        if mesh is not None and mesh.display_name:
            return mesh.display_name
        return unknown_mesh_label(mesh_id)

    def mesh_in_group(self, mesh_id: str, group_id: str) -> bool:
        mesh = self.meshes.get(mesh_id)
        return mesh is not None and group_id in mesh.organ_group_ids

    def target_display_name(self, question: SelectOrganQuestion) -> Optional[str]:
        if not has_target(question):
            return None
        if question.target_type == "mesh":
            mesh = self.meshes.get(question.target_id)
            return mesh.display_name if mesh is not None and mesh.display_name else UNKNOWN_TARGET_MESH
        group = self.groups.get(question.target_id)
        return group.group_name if group is not None and group.group_name else UNKNOWN_TARGET_GROUP


# --- per-question resolution ---

def answers_for_question(question_id: str, submissions: Iterable[Submission]) -> List[SubmissionAnswer]:
    # every correlated entry counts, including repeats within one submission
    return [
        answer
        for submission in submissions
        for answer in submission.answers
        if answer.question_id == question_id
    ]


def _choice_result(question: ChoiceQuestion, answers: List[SubmissionAnswer]) -> Tuple[int, List[AnswerBreakdown]]:
    counts = [0] * len(question.answers)
    total_correct = 0
    for answer in answers:
        idx = answer.selected_index
        # bool is an int subclass; True must not select option 1
        if not isinstance(idx, int) or isinstance(idx, bool):
            continue
        if not 0 <= idx < len(question.answers):
            continue
        counts[idx] += 1
        if question.answers[idx].is_correct:
            total_correct += 1

    breakdown = [
        AnswerBreakdown(
            answer_text=str(option.text),
            student_count=counts[i],
            is_correct_option=bool(option.is_correct),
        )
        for i, option in enumerate(question.answers)
    ]
    return total_correct, breakdown


def _is_correct_click(question: SelectOrganQuestion, mesh_id: str, refs: ReferenceMaps) -> bool:
    if not has_target(question):
        return False
    if question.target_type == "mesh":
        return mesh_id == question.target_id
    return refs.mesh_in_group(mesh_id, question.target_id)


def _select_organ_result(
    question: SelectOrganQuestion,
    answers: List[SubmissionAnswer],
    refs: ReferenceMaps,
) -> Tuple[int, List[AnswerBreakdown]]:
    counts: Dict[str, int] = {}
    no_answer = 0
    total_correct = 0

    for answer in answers:
        mesh_id = answer.clicked_mesh_id
        if not mesh_id:
            no_answer += 1
            continue
        counts[mesh_id] = counts.get(mesh_id, 0) + 1
        if _is_correct_click(question, mesh_id, refs):
            total_correct += 1

    rows = list(counts)
    # the correct mesh is always listed; a group target is not a mesh row
    if has_target(question) and question.target_type == "mesh" and question.target_id not in counts:
        rows.append(question.target_id)

    breakdown = [
        AnswerBreakdown(
            answer_text=refs.mesh_display_name(mesh_id),
            student_count=counts.get(mesh_id, 0),
            is_correct_option=_is_correct_click(question, mesh_id, refs),
        )
        for mesh_id in rows
    ]
    if no_answer:
        breakdown.append(AnswerBreakdown(answer_text=NO_ANSWER, student_count=no_answer, is_correct_option=False))
    return total_correct, breakdown


def _short_answer_texts(answers: List[SubmissionAnswer]) -> List[str]:
    return [answer.text if answer.text else NO_ANSWER for answer in answers]


def question_result(question: Question, submissions: List[Submission], refs: ReferenceMaps) -> QuestionResult:
    answers = answers_for_question(question.id, submissions)
    total_correct = 0
    breakdown: List[AnswerBreakdown] = []
    texts: Optional[List[str]] = None
    target_name: Optional[str] = None

    if isinstance(question, (MultipleChoiceQuestion, TrueFalseQuestion)):
        total_correct, breakdown = _choice_result(question, answers)
    elif isinstance(question, SelectOrganQuestion):
        target_name = refs.target_display_name(question)
        total_correct, breakdown = _select_organ_result(question, answers, refs)
    elif isinstance(question, ShortAnswerQuestion):
        texts = _short_answer_texts(answers)
    else:
        raise TypeError(f"Unsupported question variant: {type(question).__name__}")

    return QuestionResult(
        question_id=question.id,
        question_text=question.question_text,
        question_type=question.type,
        total_submissions_for_question=len(answers),
        total_correct=total_correct,
        answers_breakdown=breakdown,
        submitted_text_answers=texts,
        correct_target_display_name=target_name,
    )


def aggregate_results(quiz: Quiz, submissions: List[Submission], refs: ReferenceMaps) -> List[QuestionResult]:
    """One result per identified question, in quiz order."""
    results: List[QuestionResult] = []
    for position, question in enumerate(quiz.questions):
        if not question.id:
            logger.warning("Quiz %s: skipping question at position %d without an id", quiz.id, position)
            continue
        results.append(question_result(question, submissions, refs))
    return results
