from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Callable, Mapping, Optional


class Decision(str, enum.Enum):
    ALLOW = "allow"
    REDIRECT_TO_EXPIRED = "redirect_to_expired"
    REDIRECT_TO_ADMIN_LOGIN = "redirect_to_admin_login"


STATIC_FILES = ("/favicon.ico", "/robots.txt", "/sitemap.xml")
STATIC_DIRS = ("/icons/", "/images/", "/assets/", "/public/")
STATIC_EXTENSIONS = re.compile(
    r"\.(png|jpg|jpeg|gif|webp|svg|ico|css|js|map|txt|xml|woff|woff2|ttf)$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class GatePolicy:
    expired_path: str = "/expired"
    admin_base_path: str = "/admin-panel"
    admin_login_path: str = "/admin-panel/login"
    admin_cookie_name: str = "admin_code"
    admin_code: str = ""
    api_prefix: str = "/api"
    internal_prefixes: tuple[str, ...] = (
        "/_next",
        "/docs",
        "/redoc",
        "/openapi.json",
        "/healthz",
    )
    token_param: str = "token"


def is_static_asset(path: str) -> bool:
    if path in STATIC_FILES:
        return True
    if path.startswith(STATIC_DIRS):
        return True
    return STATIC_EXTENSIONS.search(path) is not None


def has_admin_cookie(cookies: Mapping[str, str], policy: GatePolicy) -> bool:
    if not policy.admin_code:
        return False
    return cookies.get(policy.admin_cookie_name) == policy.admin_code


def classify(
    path: str,
    query_params: Mapping[str, str],
    cookies: Mapping[str, str],
    *,
    policy: GatePolicy,
    verify: Callable[[Optional[str]], bool],
) -> Decision:
    """
    Decide what to do with a request. First matching rule wins:
    static assets, expiry notice, admin subtree, API, framework internals,
    then everything else needs a verified `token` query parameter.
    """
    if is_static_asset(path):
        return Decision.ALLOW

    # the notice page itself must stay reachable or redirects loop
    if path.startswith(policy.expired_path):
        return Decision.ALLOW

    if path.startswith(policy.admin_base_path):
        if path.startswith(policy.admin_login_path):
            return Decision.ALLOW
        if has_admin_cookie(cookies, policy):
            return Decision.ALLOW
        return Decision.REDIRECT_TO_ADMIN_LOGIN

    # API routes do their own authorization
    if path.startswith(policy.api_prefix):
        return Decision.ALLOW

    if path.startswith(policy.internal_prefixes):
        return Decision.ALLOW

    token = query_params.get(policy.token_param)
    if not token or not verify(token):
        return Decision.REDIRECT_TO_EXPIRED
    return Decision.ALLOW
