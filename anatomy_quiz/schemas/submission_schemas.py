from datetime import datetime
from typing import List, Optional
from pydantic import AliasChoices, BaseModel, Field, model_validator

ANSWER_SHAPES = ("selectedAnswerId_Index", "responseText_ClickedMesh_id", "responseText_ShortAnswer")

class SubmissionAnswerIn(BaseModel):
    questionId: str = Field(..., min_length=1, validation_alias=AliasChoices("questionId", "question_id"))
    selectedAnswerId_Index: Optional[int] = None
    responseText_ClickedMesh_id: Optional[str] = None
    responseText_ShortAnswer: Optional[str] = None

    @model_validator(mode="after")
    def exactly_one_shape(self):
        given = [name for name in ANSWER_SHAPES if getattr(self, name) is not None]
        if len(given) != 1:
            raise ValueError(
                "Each answer must carry exactly one of "
                "selectedAnswerId_Index, responseText_ClickedMesh_id, responseText_ShortAnswer"
            )
        return self

class SubmissionCreateIn(BaseModel):
    quizId: str = Field(..., validation_alias=AliasChoices("quizId", "quiz_id"))
    studentId: Optional[str] = Field(None, validation_alias=AliasChoices("studentId", "student_id"))
    studyYearAtSubmission: int = Field(..., ge=1)
    submittedAt: datetime
    answers: List[SubmissionAnswerIn]

class SubmissionAnswerOut(BaseModel):
    questionId: str
    selectedAnswerId_Index: Optional[int] = None
    responseText_ClickedMesh_id: Optional[str] = None
    responseText_ShortAnswer: Optional[str] = None

class SubmissionOut(BaseModel):
    id: str
    quizId: str
    studentId: Optional[str] = None
    studyYearAtSubmission: Optional[int] = None
    submittedAt: Optional[str] = None
    answers: List[SubmissionAnswerOut]

class SubmissionCreatedOut(BaseModel):
    success: bool = True
    submissionId: str
    data: SubmissionOut

class SubmissionListOut(BaseModel):
    success: bool = True
    data: List[SubmissionOut]
