from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from core.exceptions import TournamentException

from db import Base, engine
from core.config import settings
from core.logging import logger

from models.participant import Participant  # noqa: F401
from models.match import MatchRecord  # noqa: F401

# ROUTES
from api.routers.participants import router as participants_router
from api.routers.matches import router as matches_router
from api.routers.bracket import router as bracket_router


app = FastAPI(title="Rock Paper Scissors Tournament API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TournamentException)
async def tournament_exception_handler(request: Request, exc: TournamentException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "type": "tournament_error", "error": type(exc).__name__}
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc), "type": "validation_error"}
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    import traceback
    error_traceback = ''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    logger.error(f"Unhandled exception: {error_traceback}")
    content = {"detail": str(exc), "type": type(exc).__name__}
    if settings.debug:
        content["traceback"] = error_traceback
    return JSONResponse(status_code=500, content=content)


@app.on_event("startup")
async def startup_event():
    logger.info("Starting up application...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down application...")


@app.get("/health", tags=["Health"])
async def health():
    return {"status": "ok"}


app.include_router(participants_router)
app.include_router(matches_router)
app.include_router(bracket_router)
