"""FastAPI application with health and scheduler-triggered ranking endpoints."""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request

from emoji_ranking import __version__
from emoji_ranking.config import get_settings
from emoji_ranking.logging_config import configure_logging
from emoji_ranking.report import run_ranking_and_publish


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging and load config on startup."""
    settings = get_settings()
    configure_logging(settings.log_level)
    app.state.settings = settings
    yield


app = FastAPI(
    title="Emoji Ranking",
    lifespan=lifespan,
)


async def verify_scheduler(request: Request) -> None:
    """Verify the scheduler secret header for protected endpoints.

    Compares the X-Scheduler-Secret header against the configured secret.
    Raises HTTPException 403 if the header is missing, empty, or mismatched.
    """
    settings = get_settings()
    secret = request.headers.get("X-Scheduler-Secret", "")
    if not settings.scheduler_secret or secret != settings.scheduler_secret:
        raise HTTPException(status_code=403, detail="Invalid scheduler secret")


@app.get("/health")
async def health():
    """Health check endpoint for Cloud Run and local development."""
    return {
        "status": "ok",
        "service": "emoji-ranking",
        "version": __version__,
    }


@app.post("/ranking")
async def ranking_endpoint(_: None = Depends(verify_scheduler)):
    """Trigger the monthly run: aggregate emoji usage and post the ranking.

    Failures are not converted into a 200 response; they surface as 500 so the
    scheduler records the run as failed.
    """
    await run_ranking_and_publish(get_settings())
    return {"status": "posted"}
