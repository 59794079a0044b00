from contextlib import asynccontextmanager
from fastapi import FastAPI
from .core.config import settings
from .core.cors import setup_cors
from .core.logging_config import configure_logging
from .core.redis_manager import close_redis
from .api.v1.routers import catalog as catalog_router
from .api.v1.routers import quizzes as quizzes_router
from .api.v1.routers import results as results_router
from .api.v1.routers import submissions as submissions_router

logger = configure_logging(settings.LOG_LEVEL)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("%s starting (env=%s)", settings.APP_NAME, settings.APP_ENV)
    yield
    await close_redis()

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
setup_cors(app)

app.include_router(quizzes_router.router, prefix=settings.API_V1_PREFIX)
app.include_router(results_router.router, prefix=settings.API_V1_PREFIX)
app.include_router(submissions_router.router, prefix=settings.API_V1_PREFIX)
app.include_router(catalog_router.router, prefix=settings.API_V1_PREFIX)

@app.get("/healthz")
async def healthz():
    return {"status": "ok"}
