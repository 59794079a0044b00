from typing import List, Optional
from .errors import InvalidSubmissionError, QuizNotFoundError
from .rows import submission_row_to_dict, to_iso
from ..repositories.quiz_repository import QuizRepository
from ..repositories.submission_repository import SubmissionRepository

class SubmissionService:
    def __init__(self, repo: SubmissionRepository, quizzes: QuizRepository) -> None:
        self.repo = repo
        self.quizzes = quizzes

    def create_submission(self, payload: dict) -> dict:
        """
        Stores one attempt. payload is a dumped SubmissionCreateIn.

        Raises QuizNotFoundError when the quiz is gone and
        InvalidSubmissionError when an answer points at a question
        the quiz does not have.
        """
        quiz_id = payload["quizId"]
        res = self.quizzes.get_quiz_with_questions(quiz_id)
        if not res:
            raise QuizNotFoundError(quiz_id)
        _, questions = res
        known = {q["id"] for q in questions}

        unknown = [a["questionId"] for a in payload["answers"] if a["questionId"] not in known]
        if unknown:
            raise InvalidSubmissionError(f"Answers reference unknown questions: {', '.join(unknown)}")

        answers = []
        for a in payload["answers"]:
            item = {"question_id": a["questionId"]}
            for key in ("selectedAnswerId_Index", "responseText_ClickedMesh_id", "responseText_ShortAnswer"):
                if a.get(key) is not None:
                    item[key] = a[key]
            answers.append(item)

        row = self.repo.create_submission(
            {
                "quiz_id": quiz_id,
                "student_id": payload.get("studentId"),
                "study_year_at_submission": payload["studyYearAtSubmission"],
                "submitted_at": to_iso(payload["submittedAt"]),
                "answers": answers,
            }
        )
        return submission_row_to_dict(row)

    def list_submissions(self, quiz_id: Optional[str] = None, student_id: Optional[str] = None) -> List[dict]:
        rows = self.repo.list_submissions(quiz_id=quiz_id, student_id=student_id)
        return [submission_row_to_dict(r) for r in rows]
