"""
Navigation gate: redirects page requests according to the session.

API and other paths pass straight through.
"""

import logging

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from core.session_gate import RedirectTo, decide, is_gated
from services.auth import session_from_request

logger = logging.getLogger(__name__)


class SessionGateMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if not is_gated(path):
            return await call_next(request)

        session = session_from_request(request)
        decision = decide(session is not None, path)
        if isinstance(decision, RedirectTo):
            logger.debug("redirect %s -> %s", path, decision.path)
            return RedirectResponse(url=decision.path, status_code=307)
        return await call_next(request)
