import uvicorn

from anatomy_quiz.core.config import settings

if __name__ == "__main__":
    uvicorn.run("anatomy_quiz.main:app", host="0.0.0.0", port=settings.BACKEND_PORT)
