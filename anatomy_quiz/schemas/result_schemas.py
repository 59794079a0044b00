from typing import List, Optional
from pydantic import BaseModel

class AnswerBreakdownOut(BaseModel):
    answerText: str
    studentCount: int
    isCorrectOption: bool

class QuestionResultOut(BaseModel):
    questionId: str
    questionText: str
    questionType: str
    totalSubmissionsForQuestion: int
    totalCorrect: int
    answersBreakdown: List[AnswerBreakdownOut]
    submittedTextAnswers: Optional[List[str]] = None
    correctTargetDisplayName: Optional[str] = None
