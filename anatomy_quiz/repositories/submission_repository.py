from typing import List, Optional
from supabase import Client

class SubmissionRepository:
    """Append-only access to the submissions table."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def create_submission(self, row: dict) -> dict:
        res = self.client.table("submissions").insert(row).execute()
        if not res.data or not isinstance(res.data, list) or "id" not in res.data[0]:
            raise RuntimeError("Insert submissions failed: no returned id")
        return res.data[0]

    def list_submissions(self, quiz_id: Optional[str] = None, student_id: Optional[str] = None) -> List[dict]:
        query = self.client.table("submissions").select("*")
        if quiz_id is not None:
            query = query.eq("quiz_id", quiz_id)
        if student_id is not None:
            query = query.eq("student_id", student_id)
        res = query.order("submitted_at", desc=False).execute()
        return res.data or []

    def get_submissions_by_quiz(self, quiz_id: str) -> List[dict]:
        return self.list_submissions(quiz_id=quiz_id)
