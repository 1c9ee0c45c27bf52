from typing import Any, Callable, Optional
from urllib.parse import quote

import chatpass.domain.services as domain_services


def issue_link(
    secret: Optional[str],
    site_url: str,
    duration: Any = None,
    default_minutes: int = domain_services.DEFAULT_DURATION_MINUTES,
    clock: Callable[[], int] = domain_services.now_ms,
) -> tuple[str, float]:
    """
    Build a shareable `<site>/?token=...` link.
    Returns (link, durationMinutes). Raises ConfigError without a secret.
    """
    minutes = domain_services.normalize_duration(duration, default=default_minutes)
    token = domain_services.issue(secret, minutes, clock=clock)
    link = f"{site_url.rstrip('/')}/?token={quote(token, safe='')}"
    return link, minutes
