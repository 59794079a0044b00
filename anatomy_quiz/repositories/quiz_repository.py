from datetime import datetime
from typing import List, Optional, Tuple
from supabase import Client

class QuizRepository:
    def __init__(self, client: Client) -> None:
        self.client = client

    def list_quizzes(
        self,
        study_year: Optional[int] = None,
        scheduled_between: Optional[Tuple[datetime, datetime]] = None,
    ) -> List[dict]:
        query = self.client.table("quizzes").select(
            "id,title,description,study_year,scheduled_at,updated_at"
        )
        if study_year is not None:
            query = query.eq("study_year", study_year)
        if scheduled_between is not None:
            start, end = scheduled_between
            query = query.gte("scheduled_at", start.isoformat()).lt("scheduled_at", end.isoformat())
        res = query.order("updated_at", desc=True).execute()
        return res.data or []

    def get_quiz_with_questions(self, quiz_id: str) -> Optional[Tuple[dict, List[dict]]]:
        quiz_res = (
            self.client.table("quizzes")
            .select("*")
            .eq("id", quiz_id)
            .limit(1)
            .execute()
        )
        if not quiz_res.data:
            return None

        q_res = (
            self.client.table("questions")
            .select("*")
            .eq("quiz_id", quiz_id)
            .order("position", desc=False)
            .execute()
        )
        return quiz_res.data[0], (q_res.data or [])

    def create_quiz(self, fields: dict, questions: List[dict]) -> str:
        # no .select()/.single() after insert; v2 returns the inserted rows in data
        quiz_ins = self.client.table("quizzes").insert(fields).execute()
        if not quiz_ins.data or not isinstance(quiz_ins.data, list) or "id" not in quiz_ins.data[0]:
            raise RuntimeError("Insert quizzes failed: no returned id")

        quiz_id = quiz_ins.data[0]["id"]
        rows = self._question_rows(quiz_id, questions)
        if rows:
            self.client.table("questions").insert(rows).execute()
        return quiz_id

    def update_quiz(self, quiz_id: str, fields: dict, questions: Optional[List[dict]]) -> None:
        if fields:
            self.client.table("quizzes").update(fields).eq("id", quiz_id).execute()

        if questions is not None:
            # replace wholesale; question ids are carried over so submissions still match
            self.client.table("questions").delete().eq("quiz_id", quiz_id).execute()
            rows = self._question_rows(quiz_id, questions)
            if rows:
                self.client.table("questions").insert(rows).execute()

    def delete_quiz(self, quiz_id: str) -> None:
        self.client.table("questions").delete().eq("quiz_id", quiz_id).execute()
        self.client.table("quizzes").delete().eq("id", quiz_id).execute()

    @staticmethod
    def _question_rows(quiz_id: str, questions: List[dict]) -> List[dict]:
        rows = []
        for idx, q in enumerate(questions):
            rows.append(
                {
                    "id": q["id"],
                    "quiz_id": quiz_id,
                    "position": idx,
                    "question_text": q["questionText"],
                    "type": q["type"],
                    "answers": q.get("answers") or [],
                    "target_type": q.get("targetType"),
                    "target_id": q.get("target_id"),
                }
            )
        return rows
