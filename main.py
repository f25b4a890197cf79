import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from chore_calendar.api.routes import auth, family, person, chore, assignment, health
from chore_calendar.core.config import settings
from chore_calendar.core.logging_config import setup_logging
from chore_calendar.core.logging_middleware import LoggingMiddleware
from chore_calendar.db.init_db import init_db

load_dotenv()

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)


@app.on_event("startup")
async def startup_event():
    setup_logging(environment=settings.ENVIRONMENT)
    init_db()
    logger.info(f"{settings.PROJECT_NAME} started in {settings.ENVIRONMENT} mode")


app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are reported as a plain 400 like every other bad input"""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid request: {location} {first.get('msg', '')}".strip()
    else:
        message = "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message})


@app.get("/")
async def root():
    return {"message": "Welcome to the Chore Calendar API"}

app.include_router(health.router, tags=["System"])
app.include_router(auth.router, prefix="/auth", tags=["Auth"])
app.include_router(family.router, prefix="/families", tags=["Families"])
app.include_router(person.router, prefix="/people", tags=["People"])
app.include_router(chore.router, prefix="/chores", tags=["Chores"])
app.include_router(assignment.router, prefix="/assignments", tags=["Assignments"])
