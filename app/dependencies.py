import os
from itsdangerous import BadSignature, URLSafeTimedSerializer
from fastapi import HTTPException, Request

SESSION_COOKIE = "kd_session"
SESSION_MAX_AGE = 60 * 60 * 24 * 7  # 7 days


def _get_signer() -> URLSafeTimedSerializer:
    key = os.environ.get("SECRET_KEY", "dev-secret-change-in-production")
    return URLSafeTimedSerializer(key)


def create_session_token(household_id: str) -> str:
    return _get_signer().dumps({"household": household_id})


def read_session_token(token: str):
    """Return the household id carried by a valid token, or None."""
    try:
        data = _get_signer().loads(token, max_age=SESSION_MAX_AGE)
    except BadSignature:
        return None
    return data.get("household") if isinstance(data, dict) else None


def current_household(request: Request) -> str:
    """FastAPI dependency: the household id of the signed-in session."""
    token = request.cookies.get(SESSION_COOKIE)
    household_id = read_session_token(token) if token else None
    if not household_id:
        raise HTTPException(status_code=401, detail="Not signed in")
    return household_id


# Paths that don't require auth
_PUBLIC_PREFIXES = ("/login", "/logout", "/docs", "/openapi.json")


def is_public(path: str) -> bool:
    return any(path.startswith(p) for p in _PUBLIC_PREFIXES)
