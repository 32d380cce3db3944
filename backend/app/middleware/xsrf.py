"""
Programmers Backend — XSRF (Double-Submit Cookie) Middleware
==============================================================

What:  Issues the XSRF-TOKEN cookie and checks X-XSRF-TOKEN on mutating requests.
Why:   A forged cross-site form post carries the victim's cookies but cannot
       read them, so it cannot copy the token into a header.
How:   Angular's $http does the client half automatically: it reads the
       XSRF-TOKEN cookie and sends its value in the X-XSRF-TOKEN header.

Rules:
    - Safe methods (GET, HEAD, OPTIONS, TRACE) are never checked.
    - Unsafe methods under `xsrf_protected_prefix` need header == cookie
      (constant-time comparison), otherwise 403.
    - Any response to a request without a well-formed cookie sets a fresh one.
    - The token for the current request is exposed on request.state.xsrf_token
      so the page template can print it into a <meta> tag.
"""

import hmac
import logging
import re
import secrets

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.config import settings
from app.exceptions import XsrfError
from app.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

SAFE_METHODS = {"GET", "HEAD", "OPTIONS", "TRACE"}

# token_urlsafe(32) yields 43 characters from the URL-safe base64 alphabet
_TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9_-]{32,128}$")


def new_token() -> str:
    return secrets.token_urlsafe(32)


def is_well_formed(token: str) -> bool:
    return bool(token) and _TOKEN_PATTERN.match(token) is not None


def tokens_match(cookie_token: str, header_token: str) -> bool:
    if not is_well_formed(cookie_token) or not header_token:
        return False
    return hmac.compare_digest(cookie_token.encode(), header_token.encode())


def is_protected(path: str) -> bool:
    prefix = settings.xsrf_protected_prefix
    if not prefix:
        return True
    return path == prefix or path.startswith(prefix + "/") or path.startswith(prefix + ".")


class XsrfMiddleware(BaseHTTPMiddleware):
    """Double-submit cookie check in the Angular.js naming convention."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not settings.xsrf_enabled:
            return await call_next(request)

        cookie_token = request.cookies.get(settings.xsrf_cookie_name, "")
        has_valid_cookie = is_well_formed(cookie_token)
        token = cookie_token if has_valid_cookie else new_token()
        request.state.xsrf_token = token

        if request.method not in SAFE_METHODS and is_protected(request.url.path):
            header_token = request.headers.get(settings.xsrf_header_name, "")
            if not tokens_match(cookie_token, header_token):
                rid = request_id_var.get("")
                exc = XsrfError(context={"path": request.url.path, "method": request.method})
                logger.warning(
                    "[%s] XSRF check failed for %s %s (cookie=%s, header=%s)",
                    rid,
                    request.method,
                    request.url.path,
                    "present" if cookie_token else "missing",
                    "present" if header_token else "missing",
                )
                response: Response = JSONResponse(
                    status_code=403,
                    content={
                        "error": "xsrf_token_mismatch",
                        "message": exc.message,
                        "request_id": rid,
                    },
                )
                if not has_valid_cookie:
                    self._set_cookie(response, token)
                return response

        response = await call_next(request)
        if not has_valid_cookie:
            self._set_cookie(response, token)
        return response

    @staticmethod
    def _set_cookie(response: Response, token: str) -> None:
        # Not httponly: the Angular client has to read it
        response.set_cookie(
            key=settings.xsrf_cookie_name,
            value=token,
            path="/",
            samesite="lax",
            secure=settings.xsrf_cookie_secure,
            httponly=False,
        )
