import base64
import binascii
import logging
import secrets
from typing import Optional

from fastapi import Depends, Header, Request

from .config import Settings

logger = logging.getLogger(__name__)


class NotAuthenticated(Exception):
    """Rendered as a plain ``401 Unauthorized`` with a Basic challenge."""


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def parse_basic(authorization: Optional[str]) -> Optional[tuple[str, str]]:
    """Return ``(username, password)`` from a Basic header, or None if unusable."""
    if not authorization:
        return None
    scheme, _, param = authorization.partition(" ")
    if scheme.lower() != "basic" or not param.strip():
        return None
    try:
        decoded = base64.b64decode(param.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    username, sep, password = decoded.partition(":")
    if not sep:
        return None
    return username, password


def require_basic_auth(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> str:
    credentials = parse_basic(authorization)
    if credentials is None:
        logger.info("rejected %s %s: missing or malformed credentials", request.method, request.url.path)
        raise NotAuthenticated()
    username, password = credentials
    user_ok = secrets.compare_digest(username.encode(), settings.http_user.encode())
    pass_ok = secrets.compare_digest(password.encode(), settings.http_pass.encode())
    # unconfigured credentials never match
    if not (settings.http_user and user_ok and pass_ok):
        logger.info("rejected %s %s: bad credentials", request.method, request.url.path)
        raise NotAuthenticated()
    return username
