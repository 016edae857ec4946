from fastapi import APIRouter, Depends

from bioreel_core.errors import DomainError
from bioreel_user.feedback import FeedbackOutcome, FeedbackService
from bioreel_user.session import SessionRecord
from app.deps.deps import get_feedback_service
from app.deps.session import require_session
from app.schemas import FeedbackRequest

from ._helpers import to_http

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.post("", response_model=FeedbackOutcome)
async def submit_feedback(
    req: FeedbackRequest,
    session: SessionRecord = Depends(require_session),
    service: FeedbackService = Depends(get_feedback_service),
):
    """
    like: nudges this session toward the last run's genre and trains the shared model on the movie.
    dislike: nudges this session away from that genre only.
    """
    try:
        return service.apply_feedback(session, req.imdb_id, req.action)
    except DomainError as e:
        raise to_http(e)
