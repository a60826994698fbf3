"""Jeton de session signé (cookie `auth_token`) émis par le service d'authentification."""
import os
from typing import Optional

from itsdangerous import URLSafeTimedSerializer, BadSignature

SESSION_SALT = "inevent-session"


def _signer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(os.getenv("SECRET_KEY") or "dev-secret-key-change-me", salt=SESSION_SALT)


def _max_age() -> int:
    return int(os.getenv("SESSION_MAX_AGE", str(7 * 24 * 3600)))


def encode_token(user_id: int, role: str) -> str:
    return _signer().dumps({"uid": user_id, "role": role})


def decode_token(token: str, max_age: Optional[int] = None) -> Optional[dict]:
    """Contenu du jeton, ou None s'il est falsifié ou expiré."""
    try:
        return _signer().loads(token, max_age=max_age if max_age is not None else _max_age())
    except BadSignature:  # SignatureExpired inclus
        return None


def user_context_from_token(token: str | None) -> Optional[dict]:
    data = decode_token(token) if token else None
    if not data or data.get("uid") is None:
        return None
    return {"user_id": data["uid"], "role": data.get("role")}
