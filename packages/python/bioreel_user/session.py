from dataclasses import dataclass, field
import time
from typing import NewType

from bioreel_core.types import GitHubUser, LastRun, UserBias

from .bias import init_bias

SessionId = NewType("SessionId", str)


@dataclass
class SessionRecord:
    """Per-login state: GitHub identity, adaptive genre bias and the last recommendation run."""

    sid: SessionId
    user: GitHubUser
    access_token: str
    created_at: float = field(default_factory=time.time)
    preference_bias: UserBias = field(default_factory=init_bias)
    last_run: LastRun | None = None
