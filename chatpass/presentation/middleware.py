from __future__ import annotations

import logging
from typing import Awaitable, Callable

from fastapi import Request, Response
from fastapi.responses import RedirectResponse

import chatpass.domain.services as domain_services
from chatpass.domain.gate import Decision, classify
from chatpass.presentation.dependencies import get_gate_policy, get_token_secret

logger = logging.getLogger(__name__)


async def access_gate(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """
    Runs ahead of every route. Re-evaluated on each request since a token
    can expire in the middle of a session.
    """
    policy = get_gate_policy()
    secret = get_token_secret()
    decision = classify(
        request.url.path,
        request.query_params,
        request.cookies,
        policy=policy,
        verify=lambda token: domain_services.verify(secret, token),
    )

    if decision is Decision.REDIRECT_TO_EXPIRED:
        logger.info("access denied", extra={"path": request.url.path})
        return RedirectResponse(url=policy.expired_path, status_code=307)
    if decision is Decision.REDIRECT_TO_ADMIN_LOGIN:
        logger.info("admin cookie missing", extra={"path": request.url.path})
        return RedirectResponse(url=policy.admin_login_path, status_code=307)
    return await call_next(request)
