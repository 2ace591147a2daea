# -*- coding: utf-8 -*-
"""Auth — password hashing, signed access tokens and the FastAPI dependency.

Tokens are compact HS256 JWTs signed with `settings.jwt_secret`. They are
read from the `Authorization: Bearer` header or the auth cookie.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import os
from datetime import timedelta
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request

from ..config import settings
from ..timeutils import utc_now
from .storage import get_user_by_id

TOKEN_COOKIE_NAME = "cardio_token"

_PBKDF2_ALG = "sha256"
_PBKDF2_ITERATIONS = 200_000
_JWT_HEADER = {"alg": "HS256", "typ": "JWT"}


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64decode(data: str) -> bytes:
    return base64.urlsafe_b64decode((data + "=" * (-len(data) % 4)).encode("ascii"))


def _json_segment(obj: Dict[str, Any]) -> str:
    return _b64encode(json.dumps(obj, separators=(",", ":")).encode("utf-8"))


def _sign(signing_input: str, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), signing_input.encode("ascii"), hashlib.sha256).digest()


def hash_password(password: str) -> str:
    salt = os.urandom(16)
    derived = hashlib.pbkdf2_hmac(_PBKDF2_ALG, password.encode("utf-8"), salt, _PBKDF2_ITERATIONS)
    return f"pbkdf2_{_PBKDF2_ALG}${_PBKDF2_ITERATIONS}${_b64encode(salt)}${_b64encode(derived)}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        scheme, iterations, salt, expected = password_hash.split("$", 3)
        if not scheme.startswith("pbkdf2_"):
            return False
        actual = hashlib.pbkdf2_hmac(
            scheme.split("_", 1)[1], password.encode("utf-8"), _b64decode(salt), int(iterations)
        )
    except ValueError:
        return False
    return hmac.compare_digest(actual, _b64decode(expected))


def create_access_token(*, user_id: str, email: str) -> str:
    issued = utc_now()
    expires = issued + timedelta(days=int(settings.token_ttl_days))
    claims = {"sub": user_id, "email": email, "iat": int(issued.timestamp()), "exp": int(expires.timestamp())}
    signing_input = f"{_json_segment(_JWT_HEADER)}.{_json_segment(claims)}"
    return f"{signing_input}.{_b64encode(_sign(signing_input, settings.jwt_secret))}"


def decode_token(token: str) -> Dict[str, Any]:
    try:
        header_b64, claims_b64, sig_b64 = token.split(".")
        expected = _sign(f"{header_b64}.{claims_b64}", settings.jwt_secret)
        if not hmac.compare_digest(expected, _b64decode(sig_b64)):
            raise ValueError("bad signature")
        claims = json.loads(_b64decode(claims_b64).decode("utf-8"))
        if not isinstance(claims, dict):
            raise ValueError("bad payload")
    except (ValueError, UnicodeDecodeError) as exc:
        raise HTTPException(status_code=401, detail="Invalid token") from exc

    exp = int(claims.get("exp") or 0)
    if exp and exp < int(utc_now().timestamp()):
        raise HTTPException(status_code=401, detail="Token expired")
    return claims


def get_token_from_request(request: Request) -> Optional[str]:
    auth = request.headers.get("authorization") or ""
    if auth.lower().startswith("bearer "):
        return auth.split(" ", 1)[1].strip() or None
    return request.cookies.get(TOKEN_COOKIE_NAME) or None


def get_current_user_from_request(request: Request) -> Dict[str, Any]:
    user = getattr(request.state, "user", None)
    if user:
        return user

    token = get_token_from_request(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    claims = decode_token(token)
    user_id = str(claims.get("sub") or "")
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token")

    user = get_user_by_id(user_id)
    if not user:
        raise HTTPException(status_code=401, detail="User not found")

    request.state.user = user
    return user


def get_current_user(user: Dict[str, Any] = Depends(get_current_user_from_request)) -> Dict[str, Any]:
    return user
