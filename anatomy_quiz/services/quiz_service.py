from datetime import datetime, timezone
from typing import List, Optional, Tuple
from .rows import quiz_rows_to_dict, to_iso
from ..domain.ids import new_id
from ..repositories.quiz_repository import QuizRepository

def parse_month(month: str) -> Tuple[datetime, datetime]:
    """'YYYY-MM' -> [first instant of the month, first instant of the next)."""
    try:
        start = datetime.strptime(month, "%Y-%m").replace(tzinfo=timezone.utc)
    except ValueError:
        raise ValueError(f"Invalid month {month!r}, expected YYYY-MM") from None
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end

def _with_ids(questions: List[dict]) -> List[dict]:
    # ids are kept when the client sends them back, so old submissions still correlate
    out = []
    for q in questions:
        q = dict(q)
        q["id"] = q.get("id") or new_id()
        if q.get("answers"):
            q["answers"] = [{**a, "id": a.get("id") or new_id()} for a in q["answers"]]
        out.append(q)
    return out

def _quiz_fields(
    title: Optional[str],
    description: Optional[str],
    study_year: Optional[int],
    scheduled_at: Optional[datetime],
) -> dict:
    fields = {
        "title": title,
        "description": description,
        "study_year": study_year,
        "scheduled_at": to_iso(scheduled_at),
    }
    return {k: v for k, v in fields.items() if v is not None}

class QuizService:
    def __init__(self, repo: QuizRepository) -> None:
        self.repo = repo

    def list_quizzes(self, study_year: Optional[int] = None, month: Optional[str] = None) -> list[dict]:
        window = parse_month(month) if month else None
        items = self.repo.list_quizzes(study_year=study_year, scheduled_between=window)
        return [
            {
                "id": i["id"],
                "title": i["title"],
                "description": i.get("description"),
                "studyYear": i.get("study_year"),
                "scheduledAt": to_iso(i.get("scheduled_at")),
                "updatedAt": to_iso(i.get("updated_at")),
            }
            for i in items
        ]

    def get_quiz(self, quiz_id: str) -> Optional[dict]:
        res = self.repo.get_quiz_with_questions(quiz_id)
        if not res:
            return None
        quiz, questions = res
        return quiz_rows_to_dict(quiz, questions)

    def create_quiz(
        self,
        title: str,
        questions: List[dict],
        study_year: int,
        description: Optional[str] = None,
        scheduled_at: Optional[datetime] = None,
    ) -> str:
        fields = _quiz_fields(title, description, study_year, scheduled_at)
        return self.repo.create_quiz(fields, _with_ids(questions))

    def update_quiz(
        self,
        quiz_id: str,
        title: Optional[str] = None,
        questions: Optional[List[dict]] = None,
        study_year: Optional[int] = None,
        description: Optional[str] = None,
        scheduled_at: Optional[datetime] = None,
    ) -> None:
        fields = _quiz_fields(title, description, study_year, scheduled_at)
        self.repo.update_quiz(quiz_id, fields, _with_ids(questions) if questions is not None else None)

    def delete_quiz(self, quiz_id: str) -> None:
        self.repo.delete_quiz(quiz_id)
