"""
Redirect policy for page navigation.

Only ``/``, ``/auth/*``, ``/dashboard/*`` and ``/onboarding`` are gated;
every other path is allowed untouched.
"""

from __future__ import annotations

from dataclasses import dataclass

DASHBOARD_HOME = "/dashboard"
LOGIN_PAGE = "/auth/login"

_AUTH_AREA = "/auth"
_DASHBOARD_AREA = "/dashboard"
ONBOARDING_PAGE = "/onboarding"   # exact path, subpaths are not gated


@dataclass(frozen=True)
class Allow:
    pass


@dataclass(frozen=True)
class RedirectTo:
    path: str


Decision = Allow | RedirectTo


def _under(path: str, area: str) -> bool:
    return path == area or path.startswith(area + "/")


def _protected(path: str) -> bool:
    return _under(path, _DASHBOARD_AREA) or path == ONBOARDING_PAGE


def is_gated(path: str) -> bool:
    return path == "/" or _under(path, _AUTH_AREA) or _protected(path)


def decide(is_authenticated: bool, requested_path: str) -> Decision:
    if is_authenticated:
        if requested_path == "/" or _under(requested_path, _AUTH_AREA):
            return RedirectTo(DASHBOARD_HOME)
    elif _protected(requested_path):
        return RedirectTo(LOGIN_PAGE)
    return Allow()
