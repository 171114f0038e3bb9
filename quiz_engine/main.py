import logging
import random

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import schemas
from .config import Settings, get_settings
from .errors import QuizEngineError, QuizValidationError
from .llm import GeminiTextModel
from .service import TextModel, generate_quiz
from .subjects import SUBJECT_CATALOG

settings = get_settings()
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("quiz_engine")

app = FastAPI(
    title="Study Quiz Engine",
    description="Generates study summaries and quizzes with the Gemini API.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Dependencies ---
def get_text_model(settings: Settings = Depends(get_settings)) -> TextModel:
    """Builds the Gemini client; fails every request when no key is configured."""
    api_key = settings.require_api_key()
    return GeminiTextModel(
        api_key=api_key,
        model_name=settings.GEMINI_MODEL,
        temperature=settings.GEMINI_TEMPERATURE,
    )


def get_rng() -> random.Random | None:
    return None


# --- Error Handlers ---
def _validation_message(errors) -> str:
    missing = [str(e["loc"][-1]) for e in errors if e["type"] == "missing" and len(e["loc"]) > 1]
    if missing:
        return f"Missing required parameters: {', '.join(missing)}."
    first = errors[0]
    field = ".".join(str(part) for part in first["loc"] if part != "body")
    message = first["msg"].removeprefix("Value error, ")
    return f"{field}: {message}" if field else message


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError):
    error = QuizValidationError(_validation_message(exc.errors()))
    logger.info("Rejected quiz request: %s", error.message)
    return JSONResponse(status_code=error.status_code, content=error.to_content())


@app.exception_handler(QuizEngineError)
async def handle_quiz_engine_error(request: Request, exc: QuizEngineError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("Unexpected error while handling %s", request.url.path)
    return JSONResponse(
        status_code=500, content={"message": str(exc) or "Internal server error."}
    )


# --- API Endpoints ---
@app.get("/")
def read_root():
    """Health check endpoint."""
    return {"status": "ok", "message": "Quiz Engine is running!"}


@app.get("/subjects", response_model=schemas.SubjectCatalog)
def list_subjects():
    """Exam areas a user can pick a quiz subject from."""
    return {"subjects": SUBJECT_CATALOG}


@app.post(
    "/api/generateQuiz",
    response_model=schemas.QuizResult,
    response_model_exclude_none=True,
    responses={
        400: {"model": schemas.ErrorResponse},
        500: {"model": schemas.ErrorResponse},
    },
)
def create_quiz(
    request: schemas.QuizRequest,
    model: TextModel = Depends(get_text_model),
    rng: random.Random | None = Depends(get_rng),
    settings: Settings = Depends(get_settings),
):
    """
    Generates a summary and quiz questions for a subject using the Gemini API.
    """
    return generate_quiz(request, model, language=settings.QUIZ_LANGUAGE, rng=rng)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
