"""
Catalog API — Security Headers Middleware
===========================================

What:  Adds conservative security headers to every response.
How:   Headers already set by a handler are left alone. No
       Content-Security-Policy is sent: the interactive docs at /docs load
       their assets from a CDN.

Headers:
    X-Content-Type-Options:        nosniff
    X-Frame-Options:               SAMEORIGIN
    Referrer-Policy:               no-referrer
    X-DNS-Prefetch-Control:        off
    Strict-Transport-Security:     max-age=15552000; includeSubDomains
    Cross-Origin-Resource-Policy:  same-origin
"""

from typing import Dict, Mapping, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

DEFAULT_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "X-DNS-Prefetch-Control": "off",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Cross-Origin-Resource-Policy": "same-origin",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, headers: Optional[Mapping[str, str]] = None, **kwargs):
        super().__init__(app, **kwargs)
        self.headers = dict(DEFAULT_HEADERS if headers is None else headers)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        for name, value in self.headers.items():
            response.headers.setdefault(name, value)
        return response
