from typing import Callable, Optional

from fastapi import Depends, HTTPException, Query, Request, status

import chatpass.domain.services as domain_services
from chatpass.application.chat_session import ChatSession, SessionRegistry
from chatpass.domain.entities import AccessToken
from chatpass.domain.errors import InvalidToken
from chatpass.domain.gate import GatePolicy
from chatpass.domain.notifier import get_notifier
from chatpass.domain.ports.quota_store import QuotaStorePort
from chatpass.infrastructure.redis_cache.pool import get_redis
from chatpass.infrastructure.redis_cache.quota_store import RedisQuotaStore
from chatpass.settings import get_settings


def get_quota_store() -> QuotaStorePort:
    return RedisQuotaStore(get_redis())


def get_token_secret() -> Optional[str]:
    return get_settings().token_secret


def get_clock() -> Callable[[], int]:
    return domain_services.now_ms


def get_gate_policy() -> GatePolicy:
    settings = get_settings()
    return GatePolicy(
        admin_code=settings.admin_code,
        admin_cookie_name=settings.admin_cookie_name,
    )


def build_registry(store: QuotaStorePort) -> SessionRegistry:
    settings = get_settings()
    notifier = get_notifier()

    def factory(token: Optional[str], expires_at: Optional[int]) -> ChatSession:
        return ChatSession(
            token=token,
            expires_at=expires_at,
            store=store,
            notifier=notifier,
            key_prefix=settings.quota_key_prefix,
            theme=settings.widget_theme,
            max_credits=settings.max_credits,
            debounce_seconds=settings.turn_debounce_seconds,
        )

    return SessionRegistry(factory)


def get_registry(
    request: Request, store: QuotaStorePort = Depends(get_quota_store)
) -> SessionRegistry:
    # one registry per app, built on first use
    registry = getattr(request.app.state, "registry", None)
    if registry is None:
        registry = build_registry(store)
        request.app.state.registry = registry
    return registry


def require_access_token(
    token: Optional[str] = Query(None),
    secret: Optional[str] = Depends(get_token_secret),
    clock: Callable[[], int] = Depends(get_clock),
) -> AccessToken:
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid or expired token"
        )
    try:
        return domain_services.check(secret, token, clock=clock)
    except InvalidToken:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid or expired token"
        )
