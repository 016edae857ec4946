from fastapi import APIRouter, Depends

from bioreel_core.types import ModelStats
from bioreel_genre.decision import GenreDecisionEngine
from bioreel_genre.naive_bayes import NaiveBayesGenreModel
from bioreel_user.bias import init_bias
from bioreel_user.session import SessionRecord
from app.deps.deps import get_decision_engine, get_genre_model
from app.deps.session import get_optional_session
from app.schemas import DecisionRequest, DecisionResponse

router = APIRouter(tags=["genre"])


@router.post("/genre/decision", response_model=DecisionResponse)
async def preview_decision(
    req: DecisionRequest,
    session: SessionRecord | None = Depends(get_optional_session),
    engine: GenreDecisionEngine = Depends(get_decision_engine),
):
    """Explain the genre the engine would pick for a bio/location, using the caller's bias if logged in."""
    user_bias = dict(session.preference_bias) if session else init_bias(engine.model.labels)
    decision = engine.decide(req.bio, req.location, user_bias)
    return DecisionResponse(**decision.model_dump(), user_bias=user_bias)


@router.get("/model/stats", response_model=ModelStats)
async def model_stats(model: NaiveBayesGenreModel = Depends(get_genre_model)):
    return model.stats()
