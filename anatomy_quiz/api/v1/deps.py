from typing import Annotated
from fastapi import Depends

from ...core.config import settings
from ...core.redis_manager import get_redis
from ...core.supabase_client import get_supabase
from ...repositories.catalog_repository import CatalogRepository
from ...repositories.quiz_repository import QuizRepository
from ...repositories.submission_repository import SubmissionRepository
from ...services.catalog_service import CatalogService
from ...services.quiz_service import QuizService
from ...services.results_cache import ResultsCache
from ...services.results_service import ResultsService
from ...services.submission_service import SubmissionService

# Service factories; tests swap these through app.dependency_overrides

def get_quiz_service() -> QuizService:
    return QuizService(QuizRepository(get_supabase()))

def get_submission_service() -> SubmissionService:
    client = get_supabase()
    return SubmissionService(SubmissionRepository(client), QuizRepository(client))

def get_catalog_service() -> CatalogService:
    return CatalogService(CatalogRepository(get_supabase()), settings.CATALOG_SEARCH_LIMIT)

def get_results_service() -> ResultsService:
    client = get_supabase()
    return ResultsService(QuizRepository(client), SubmissionRepository(client), CatalogRepository(client))

async def get_results_cache() -> ResultsCache:
    return ResultsCache(await get_redis(), settings.RESULTS_CACHE_TTL_SECONDS)

QuizServiceDep = Annotated[QuizService, Depends(get_quiz_service)]
SubmissionServiceDep = Annotated[SubmissionService, Depends(get_submission_service)]
CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]
ResultsServiceDep = Annotated[ResultsService, Depends(get_results_service)]
ResultsCacheDep = Annotated[ResultsCache, Depends(get_results_cache)]
