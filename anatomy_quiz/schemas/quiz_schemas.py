from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, Field, field_validator

from ..domain.ids import is_valid_id

class AnswerIn(BaseModel):
    id: Optional[str] = None
    text: str = Field(..., min_length=1)
    isCorrect: bool = False

class _QuestionBase(BaseModel):
    id: Optional[str] = None
    questionText: str = Field(..., min_length=1)

class MultipleChoiceQuestionIn(_QuestionBase):
    type: Literal["multiple-choice"]
    answers: Annotated[list[AnswerIn], Field(min_length=1)]

class TrueFalseQuestionIn(_QuestionBase):
    type: Literal["true-false"]
    answers: Annotated[list[AnswerIn], Field(min_length=1)]

class SelectOrganQuestionIn(_QuestionBase):
    type: Literal["select-organ"]
    targetType: Literal["mesh", "group"]
    target_id: str

    @field_validator("target_id")
    @classmethod
    def validate_target_id(cls, v: str) -> str:
        if not is_valid_id(v):
            raise ValueError("target_id must be a mesh or organ group id")
        return v

class ShortAnswerQuestionIn(_QuestionBase):
    type: Literal["short-answer"]

QuestionIn = Annotated[
    Union[MultipleChoiceQuestionIn, TrueFalseQuestionIn, SelectOrganQuestionIn, ShortAnswerQuestionIn],
    Field(discriminator="type"),
]

def _check_question_ids(questions: Optional[List[QuestionIn]]) -> Optional[List[QuestionIn]]:
    if questions is None:
        return questions
    seen: set[str] = set()
    for q in questions:
        if q.id is None:
            continue
        if not is_valid_id(q.id):
            raise ValueError(f"Malformed question id: {q.id}")
        if q.id in seen:
            raise ValueError(f"Duplicate question id: {q.id}")
        seen.add(q.id)
    return questions

class QuizCreateIn(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    studyYear: int = Field(..., ge=1)
    questions: Annotated[List[QuestionIn], Field(min_length=1)]
    scheduledAt: Optional[datetime] = None

    @field_validator("questions")
    @classmethod
    def validate_questions(cls, v):
        return _check_question_ids(v)

class QuizUpdateIn(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    studyYear: Optional[int] = Field(None, ge=1)
    questions: Optional[Annotated[List[QuestionIn], Field(min_length=1)]] = None
    scheduledAt: Optional[datetime] = None

    @field_validator("questions")
    @classmethod
    def validate_questions(cls, v):
        return _check_question_ids(v)

class AnswerOut(BaseModel):
    id: Optional[str] = None
    text: str
    isCorrect: bool

class QuestionOut(BaseModel):
    id: str
    questionText: str
    type: str
    answers: list[AnswerOut] = []
    targetType: Optional[str] = None
    target_id: Optional[str] = None
    position: int

class QuizOut(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    studyYear: Optional[int] = None
    scheduledAt: Optional[str] = None
    questions: List[QuestionOut]
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None

class QuizListItem(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    studyYear: Optional[int] = None
    scheduledAt: Optional[str] = None
    updatedAt: Optional[str] = None
