import os
from collections.abc import Callable
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CachePolicyKind(str, Enum):
    UNTIL_NEXT_WRITE = "until-next-write"
    UNTIL_PROCESS_EXIT = "until-process-exit"
    TTL = "ttl"
    IN_MEMORY_ONLY = "in-memory-only"
    NO_CACHE = "no-cache"


class KeyCodingStyle(str, Enum):
    CAMEL_CASE = "camel"
    NONE = "none"


class LogLevel(str, Enum):
    NONE = "none"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    DEBUG = "debug"


class CachePolicy(BaseModel):
    """When cached model values are invalidated.

    ``ttl_seconds`` is only meaningful for ``CachePolicyKind.TTL``; when it is
    left unset the configuration's ``default_ttl_seconds`` applies.
    """

    model_config = ConfigDict(frozen=True)

    kind: CachePolicyKind = CachePolicyKind.UNTIL_NEXT_WRITE
    ttl_seconds: float | None = Field(default=None, ge=0)

    @classmethod
    def until_next_write(cls) -> "CachePolicy":
        return cls(kind=CachePolicyKind.UNTIL_NEXT_WRITE)

    @classmethod
    def until_process_exit(cls) -> "CachePolicy":
        return cls(kind=CachePolicyKind.UNTIL_PROCESS_EXIT)

    @classmethod
    def ttl(cls, seconds: float | None = None) -> "CachePolicy":
        return cls(kind=CachePolicyKind.TTL, ttl_seconds=seconds)

    @classmethod
    def in_memory_only(cls) -> "CachePolicy":
        return cls(kind=CachePolicyKind.IN_MEMORY_ONLY)

    @classmethod
    def no_cache(cls) -> "CachePolicy":
        return cls(kind=CachePolicyKind.NO_CACHE)

    @classmethod
    def parse(cls, text: str) -> "CachePolicy":
        """Parse ``until-next-write``, ``ttl:60``, ``no-cache`` and friends."""
        raw = text.strip().lower().replace("_", "-")
        if raw.startswith("ttl"):
            _, _, seconds = raw.partition(":")
            return cls.ttl(float(seconds) if seconds else None)
        return cls(kind=CachePolicyKind(raw))

    @property
    def persists(self) -> bool:
        return self.kind not in (CachePolicyKind.NO_CACHE, CachePolicyKind.IN_MEMORY_ONLY)

    def __str__(self) -> str:
        if self.kind is CachePolicyKind.TTL and self.ttl_seconds is not None:
            return f"ttl:{self.ttl_seconds:g}"
        return self.kind.value


class Configuration(BaseModel):
    """Process-wide options, fixed before any model instance is created.

    ``request_timeout``, ``common_headers`` and ``auth_token_provider`` are only
    read by the HTTP transport.
    """

    model_config = ConfigDict(frozen=True)

    cache_policy: CachePolicy = Field(default_factory=CachePolicy)
    default_ttl_seconds: float = Field(default=3600.0, ge=0)
    key_coding_style: KeyCodingStyle = KeyCodingStyle.CAMEL_CASE
    log_level: LogLevel = LogLevel.WARNING
    request_timeout: float = Field(default=30.0, gt=0)
    common_headers: dict[str, str] = Field(default_factory=dict)
    auth_token_provider: Callable[[], str | None] | None = None

    @model_validator(mode="after")
    def _check_ttl(self) -> "Configuration":
        policy = self.cache_policy
        if policy.kind is CachePolicyKind.TTL and policy.ttl_seconds is None and self.default_ttl_seconds <= 0:
            raise ValueError("TTL cache policy needs a positive ttl_seconds or default_ttl_seconds")
        return self

    @property
    def ttl_seconds(self) -> float:
        if self.cache_policy.ttl_seconds is not None:
            return self.cache_policy.ttl_seconds
        return self.default_ttl_seconds

    @classmethod
    def from_env(cls) -> "Configuration":
        return cls(
            cache_policy=CachePolicy.parse(os.getenv("DRIFTJSON_CACHE_POLICY", "until-next-write")),
            key_coding_style=KeyCodingStyle(os.getenv("DRIFTJSON_KEY_STYLE", "camel").lower()),
            log_level=LogLevel(os.getenv("DRIFTJSON_LOG_LEVEL", "warning").lower()),
            request_timeout=float(os.getenv("DRIFTJSON_REQUEST_TIMEOUT", "30")),
        )
