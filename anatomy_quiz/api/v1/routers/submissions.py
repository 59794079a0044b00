from fastapi import APIRouter, HTTPException, Query, status
from typing import Optional
from ..deps import ResultsCacheDep, SubmissionServiceDep
from ....domain.ids import is_valid_id
from ....schemas.submission_schemas import SubmissionCreateIn, SubmissionCreatedOut, SubmissionListOut
from ....services.errors import InvalidSubmissionError, QuizNotFoundError

router = APIRouter(prefix="/submissions", tags=["submissions"])

@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SubmissionCreatedOut)
async def create_submission(payload: SubmissionCreateIn, svc: SubmissionServiceDep, cache: ResultsCacheDep):
    if not is_valid_id(payload.quizId):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid Quiz ID format")
    try:
        data = svc.create_submission(payload.model_dump())
    except QuizNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quiz not found")
    except InvalidSubmissionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    await cache.invalidate(payload.quizId)
    return {"success": True, "submissionId": data["id"], "data": data}

@router.get("/", response_model=SubmissionListOut)
async def list_submissions(
    svc: SubmissionServiceDep,
    quizId: Optional[str] = Query(None),
    studentId: Optional[str] = Query(None),
):
    if quizId is not None and not is_valid_id(quizId):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid Quiz ID format")
    return {"success": True, "data": svc.list_submissions(quiz_id=quizId, student_id=studentId)}
