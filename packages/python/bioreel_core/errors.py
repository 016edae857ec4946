class DomainError(Exception):
    code: str = "domain_error"
    status: int = 400

    def __init__(self, message: str = "", *, code: str | None = None, status: int | None = None):
        super().__init__(message or self.__class__.__name__)
        if code: self.code = code
        if status: self.status = status

class UpstreamAuthError(DomainError):
    code = "upstream_auth"
    status = 502

class InvalidOAuthState(DomainError):
    code = "invalid_oauth_state"
    status = 400

class CatalogError(DomainError):
    code = "catalog_error"
    status = 502

class InvalidFeedback(DomainError):
    code = "invalid_feedback"
    status = 400

class NoActiveRun(DomainError):
    code = "no_active_run"
    status = 400

class MovieNotInRun(DomainError):
    code = "not_found"
    status = 404
