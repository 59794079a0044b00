import logging
from fastapi import APIRouter, HTTPException, status
from .quizzes import ensure_quiz_id
from ..deps import ResultsCacheDep, ResultsServiceDep
from ....schemas.result_schemas import QuestionResultOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quizzes", tags=["results"])

@router.get(
    "/{quiz_id}/results",
    response_model=list[QuestionResultOut],
    response_model_exclude_none=True,
)
async def get_quiz_results(quiz_id: str, svc: ResultsServiceDep, cache: ResultsCacheDep):
    """Per-question statistics, in the quiz's question order."""
    ensure_quiz_id(quiz_id)

    # read before computing so a concurrent submission makes this entry unreachable
    generation = await cache.generation(quiz_id)
    cached = await cache.get(quiz_id, generation)
    if cached is not None:
        return cached

    try:
        data = svc.get_results(quiz_id)
    except Exception as e:
        logger.exception("Failed to get results for quiz %s", quiz_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to get quiz results", "details": str(e)},
        )
    if data is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quiz not found")

    await cache.set(quiz_id, generation, data)
    return data
