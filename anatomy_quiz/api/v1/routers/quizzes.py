from fastapi import APIRouter, HTTPException, Query, status
from typing import Optional
from ..deps import QuizServiceDep, ResultsCacheDep
from ....domain.ids import is_valid_id
from ....schemas.quiz_schemas import QuizCreateIn, QuizOut, QuizUpdateIn, QuizListItem

router = APIRouter(prefix="/quizzes", tags=["quizzes"])

def ensure_quiz_id(quiz_id: str) -> None:
    if not is_valid_id(quiz_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid Quiz ID format")

@router.get("/", response_model=list[QuizListItem])
async def list_quizzes(
    svc: QuizServiceDep,
    studyYear: Optional[int] = Query(None, ge=1),
    month: Optional[str] = Query(None, description="Scheduled month, YYYY-MM"),
):
    try:
        return svc.list_quizzes(study_year=studyYear, month=month)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.get("/{quiz_id}", response_model=QuizOut)
async def get_quiz(quiz_id: str, svc: QuizServiceDep):
    ensure_quiz_id(quiz_id)
    data = svc.get_quiz(quiz_id)
    if not data:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quiz not found")
    return data

@router.post("/", status_code=status.HTTP_201_CREATED, response_model=QuizOut)
async def create_quiz(payload: QuizCreateIn, svc: QuizServiceDep):
    quiz_id = svc.create_quiz(
        payload.title,
        [q.model_dump() for q in payload.questions],
        study_year=payload.studyYear,
        description=payload.description,
        scheduled_at=payload.scheduledAt,
    )
    return svc.get_quiz(quiz_id)

@router.put("/{quiz_id}", response_model=QuizOut)
async def update_quiz(quiz_id: str, payload: QuizUpdateIn, svc: QuizServiceDep, cache: ResultsCacheDep):
    ensure_quiz_id(quiz_id)
    if not payload.model_fields_set:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Nothing to update")
    if not svc.get_quiz(quiz_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quiz not found")
    svc.update_quiz(
        quiz_id,
        title=payload.title,
        questions=[q.model_dump() for q in payload.questions] if payload.questions is not None else None,
        study_year=payload.studyYear,
        description=payload.description,
        scheduled_at=payload.scheduledAt,
    )
    await cache.invalidate(quiz_id)
    return svc.get_quiz(quiz_id)

@router.delete("/{quiz_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_quiz(quiz_id: str, svc: QuizServiceDep, cache: ResultsCacheDep):
    ensure_quiz_id(quiz_id)
    if not svc.get_quiz(quiz_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quiz not found")
    svc.delete_quiz(quiz_id)
    await cache.invalidate(quiz_id)
    return None
