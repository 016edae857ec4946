from fastapi import APIRouter, Depends

from bioreel_genre.naive_bayes import NaiveBayesGenreModel
from bioreel_user.session import SessionRecord
from app.deps.deps import get_genre_model
from app.deps.session import get_optional_session
from app.schemas import MeResponse

router = APIRouter(tags=["profile"])


@router.get("/me", response_model=MeResponse, response_model_exclude_none=True)
async def me(
    session: SessionRecord | None = Depends(get_optional_session),
    model: NaiveBayesGenreModel = Depends(get_genre_model),
):
    if session is None:
        return MeResponse(logged_in=False)
    return MeResponse(
        logged_in=True,
        login=session.user.login,
        bio=session.user.bio,
        location=session.user.location,
        preference_bias=dict(session.preference_bias or {}),
        model_stats=model.stats(),
    )
