from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Literal, Optional, Union

TargetType = Literal["mesh", "group"]


@dataclass(frozen=True)
class Answer:
    id: Optional[str]
    text: str
    is_correct: bool


@dataclass(frozen=True)
class MultipleChoiceQuestion:
    id: Optional[str]
    question_text: str
    answers: List[Answer]
    type: Literal["multiple-choice"] = "multiple-choice"


@dataclass(frozen=True)
class TrueFalseQuestion:
    id: Optional[str]
    question_text: str
    answers: List[Answer]
    type: Literal["true-false"] = "true-false"


@dataclass(frozen=True)
class SelectOrganQuestion:
    id: Optional[str]
    question_text: str
    target_type: Optional[TargetType]
    target_id: Optional[str]
    type: Literal["select-organ"] = "select-organ"


@dataclass(frozen=True)
class ShortAnswerQuestion:
    id: Optional[str]
    question_text: str
    type: Literal["short-answer"] = "short-answer"


ChoiceQuestion = Union[MultipleChoiceQuestion, TrueFalseQuestion]
Question = Union[MultipleChoiceQuestion, TrueFalseQuestion, SelectOrganQuestion, ShortAnswerQuestion]


@dataclass(frozen=True)
class Quiz:
    id: str
    title: str
    questions: List[Question]
    study_year: int
    description: Optional[str] = None
    scheduled_at: Optional[datetime] = None


@dataclass(frozen=True)
class SubmissionAnswer:
    """One loosely-typed answer entry; which field matters depends on the question."""

    question_id: str
    selected_index: Optional[int] = None
    clicked_mesh_id: Optional[str] = None
    text: Optional[str] = None


@dataclass(frozen=True)
class Submission:
    id: str
    quiz_id: str
    study_year_at_submission: int
    submitted_at: datetime
    answers: List[SubmissionAnswer] = field(default_factory=list)
    student_id: Optional[str] = None


@dataclass(frozen=True)
class MeshCatalogItem:
    id: str
    mesh_name: str
    display_name: str
    organ_group_ids: frozenset = frozenset()
    default_study_year: Optional[int] = None


@dataclass(frozen=True)
class OrganGroup:
    id: str
    group_name: str
    description: Optional[str] = None
    default_study_year: Optional[int] = None


@dataclass(frozen=True)
class AnswerBreakdown:
    answer_text: str
    student_count: int
    is_correct_option: bool


@dataclass(frozen=True)
class QuestionResult:
    question_id: str
    question_text: str
    question_type: str
    total_submissions_for_question: int
    total_correct: int
    answers_breakdown: List[AnswerBreakdown]
    submitted_text_answers: Optional[List[str]] = None
    correct_target_display_name: Optional[str] = None
