from .routes_auth import router as auth_router
from .routes_feedback import router as feedback_router
from .routes_genre import router as genre_router
from .routes_profile import router as profile_router

all_routers = [
    auth_router,
    feedback_router,
    genre_router,
    profile_router,
]
