import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from dotenv import find_dotenv, load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic_settings import BaseSettings, SettingsConfigDict

from bioreel_core.types import DecisionParams
from bioreel_genre.decision import GenreDecisionEngine
from bioreel_genre.naive_bayes import build_seeded_model
from bioreel_github.github_client import GitHubOAuthClient
from bioreel_omdb.omdb_client import OMDbClient
from bioreel_user.feedback import FeedbackService
from app.infrastructure.cache.oauth_state_store import OAuthStateStore
from app.infrastructure.cache.session_store import SessionStore
from .routers import all_routers

log = logging.getLogger(__name__)


class Settings(BaseSettings):
    app_name: str = "BioReel Movie Recommender API"
    # credentials
    github_client_id: str = ""
    github_client_secret: str = ""
    omdb_api_key: str = ""
    # deployment
    public_host: str = "localhost"
    port: int = 3000
    is_production: bool = False
    log_level: str = "INFO"
    http_timeout: float = 10.0
    # sessions
    session_cookie_name: str = "sid"
    session_ttl_sec: int = 0  # 0 = sessions live until logout/restart
    # recommendation tuning
    feedback_step: float = 0.25
    # env config
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def redirect_uri(self) -> str:
        if self.is_production:
            return f"https://{self.public_host}/oauth/github/callback"
        return f"http://localhost:{self.port}/oauth/github/callback"


def _init_recommendation_stack(app: FastAPI) -> None:
    settings: Settings = app.state.settings
    startup_t0 = time.perf_counter()

    missing = [
        name
        for name, value in {
            "GITHUB_CLIENT_ID": settings.github_client_id,
            "GITHUB_CLIENT_SECRET": settings.github_client_secret,
            "OMDB_API_KEY": settings.omdb_api_key,
        }.items()
        if not (value and value.strip())
    ]
    if missing:
        log.warning("Missing credentials in environment: %s", ", ".join(sorted(missing)))

    genre_model = build_seeded_model()
    app.state.genre_model = genre_model
    app.state.decision_engine = GenreDecisionEngine(genre_model, DecisionParams())
    app.state.feedback_service = FeedbackService(genre_model, step=settings.feedback_step)

    app.state.github_client = GitHubOAuthClient(
        settings.github_client_id,
        settings.github_client_secret,
        timeout=settings.http_timeout,
    )
    app.state.omdb_client = OMDbClient(settings.omdb_api_key, timeout=settings.http_timeout)

    app.state.session_store = SessionStore(absolute_ttl_sec=settings.session_ttl_sec)
    app.state.oauth_state_store = OAuthStateStore()

    log.info("Total startup time: %.2fs", time.perf_counter() - startup_t0)


@asynccontextmanager
async def lifespan(app: FastAPI):
    load_dotenv(find_dotenv(), override=False)

    settings = Settings()
    app.state.settings = settings
    app.state.started_at = time.time()

    logging.basicConfig(level=settings.log_level.upper())
    logging.getLogger("httpx").setLevel(logging.WARNING)
    log.info(
        "Starting %s (%s)",
        settings.app_name,
        "production" if settings.is_production else "development",
    )

    _init_recommendation_stack(app)

    try:
        yield
    finally:
        await app.state.github_client.aclose()
        await app.state.omdb_client.aclose()


app = FastAPI(title="BioReel Movie Recommender API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health():
    s = app.state.settings
    return {
        "status": "healthy",
        "service": s.app_name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": time.time() - app.state.started_at,
        "environment": "production" if s.is_production else "development",
    }


@app.get("/")
def read_root():
    return {"status": "ok"}


for r in all_routers:
    app.include_router(r)
