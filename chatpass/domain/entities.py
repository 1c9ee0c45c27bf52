from dataclasses import dataclass


@dataclass(frozen=True)
class AccessToken:
    expires_at: int
    signature: str

    def __post_init__(self):
        if self.expires_at < 0:
            raise ValueError("expires_at must be non-negative")
        if not self.signature:
            raise ValueError("signature is required")

    def is_expired(self, now_ms: int) -> bool:
        return now_ms > self.expires_at


@dataclass(frozen=True)
class QuotaSnapshot:
    key: str
    remaining: int
    max_credits: int

    @property
    def blocked(self) -> bool:
        return self.remaining == 0
