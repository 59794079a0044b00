"""Conversions between Supabase rows, domain objects and API dicts."""

import logging
from datetime import datetime
from typing import Any, List, Optional

from ..domain.model import (
    Answer,
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


def to_iso(value: Any) -> Optional[str]:
    # Supabase returns ISO strings, inserts may hand back datetimes
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def to_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


# --- quizzes ---

def _answers_from_row(raw: Optional[list]) -> List[Answer]:
    return [
        Answer(id=a.get("id"), text=str(a.get("text", "")), is_correct=bool(a.get("isCorrect")))
        for a in raw or []
    ]


def question_from_row(row: dict) -> Optional[Question]:
    kind = row.get("type")
    qid = row.get("id")
    text = row.get("question_text", "")
    if kind == "multiple-choice":
        return MultipleChoiceQuestion(id=qid, question_text=text, answers=_answers_from_row(row.get("answers")))
    if kind == "true-false":
        return TrueFalseQuestion(id=qid, question_text=text, answers=_answers_from_row(row.get("answers")))
    if kind == "select-organ":
        return SelectOrganQuestion(
            id=qid,
            question_text=text,
            target_type=row.get("target_type") if row.get("target_type") in ("mesh", "group") else None,
            target_id=row.get("target_id"),
        )
    if kind == "short-answer":
        return ShortAnswerQuestion(id=qid, question_text=text)
    logger.warning("Question %s has unknown type %r, ignoring it", qid, kind)
    return None


def quiz_from_rows(quiz: dict, questions: List[dict]) -> Quiz:
    parsed = [question_from_row(q) for q in questions]
    return Quiz(
        id=quiz["id"],
        title=quiz["title"],
        description=quiz.get("description"),
        study_year=quiz.get("study_year") or 0,
        scheduled_at=to_datetime(quiz.get("scheduled_at")),
        questions=[q for q in parsed if q is not None],
    )


def question_row_to_dict(q: dict) -> dict:
    return {
        "id": q["id"],
        "questionText": q["question_text"],
        "type": q["type"],
        "answers": q.get("answers") or [],
        "targetType": q.get("target_type"),
        "target_id": q.get("target_id"),
        "position": q["position"],
    }


def quiz_rows_to_dict(quiz: dict, questions: List[dict]) -> dict:
    return {
        "id": quiz["id"],
        "title": quiz["title"],
        "description": quiz.get("description"),
        "studyYear": quiz.get("study_year"),
        "scheduledAt": to_iso(quiz.get("scheduled_at")),
        "createdAt": to_iso(quiz.get("created_at")),
        "updatedAt": to_iso(quiz.get("updated_at")),
        "questions": [question_row_to_dict(q) for q in questions],
    }


# --- submissions ---

def submission_from_row(row: dict) -> Submission:
    answers = [
        SubmissionAnswer(
            question_id=str(a.get("question_id", "")),
            selected_index=a.get("selectedAnswerId_Index"),
            clicked_mesh_id=a.get("responseText_ClickedMesh_id"),
            text=a.get("responseText_ShortAnswer"),
        )
        for a in row.get("answers") or []
    ]
    return Submission(
        id=row["id"],
        quiz_id=row["quiz_id"],
        student_id=row.get("student_id"),
        study_year_at_submission=row.get("study_year_at_submission") or 0,
        submitted_at=to_datetime(row.get("submitted_at")),
        answers=answers,
    )


def submission_row_to_dict(row: dict) -> dict:
    answers = []
    for a in row.get("answers") or []:
        item = {"questionId": a.get("question_id")}
        for key in ("selectedAnswerId_Index", "responseText_ClickedMesh_id", "responseText_ShortAnswer"):
            if a.get(key) is not None:
                item[key] = a[key]
        answers.append(item)
    return {
        "id": row["id"],
        "quizId": row["quiz_id"],
        "studentId": row.get("student_id"),
        "studyYearAtSubmission": row.get("study_year_at_submission"),
        "submittedAt": to_iso(row.get("submitted_at")),
        "answers": answers,
    }


# --- catalog ---

def mesh_from_row(row: dict) -> MeshCatalogItem:
    return MeshCatalogItem(
        id=row["id"],
        mesh_name=row.get("mesh_name", ""),
        display_name=row.get("display_name", ""),
        organ_group_ids=frozenset(str(g) for g in row.get("organ_group_ids") or []),
        default_study_year=row.get("default_study_year"),
    )


def group_from_row(row: dict) -> OrganGroup:
    return OrganGroup(
        id=row["id"],
        group_name=row.get("group_name", ""),
        description=row.get("description"),
        default_study_year=row.get("default_study_year"),
    )


def mesh_row_to_dict(row: dict) -> dict:
    return {
        "id": row["id"],
        "meshName": row["mesh_name"],
        "displayName": row["display_name"],
        "organGroupIds": row.get("organ_group_ids") or [],
        "defaultStudyYear": row.get("default_study_year"),
    }


def group_row_to_dict(row: dict) -> dict:
    return {
        "id": row["id"],
        "groupName": row["group_name"],
        "description": row.get("description"),
        "defaultStudyYear": row.get("default_study_year"),
    }


# --- results ---

def result_to_dict(result: QuestionResult) -> dict:
    return {
        "questionId": result.question_id,
        "questionText": result.question_text,
        "questionType": result.question_type,
        "totalSubmissionsForQuestion": result.total_submissions_for_question,
        "totalCorrect": result.total_correct,
        "answersBreakdown": [
            {
                "answerText": b.answer_text,
                "studentCount": b.student_count,
                "isCorrectOption": b.is_correct_option,
            }
            for b in result.answers_breakdown
        ],
        "submittedTextAnswers": result.submitted_text_answers,
        "correctTargetDisplayName": result.correct_target_display_name,
    }
