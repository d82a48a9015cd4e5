import os
from dataclasses import dataclass

from regain.catalog import DEFAULT_CATALOG_SOURCES, DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True)
class Config:
    catalog_sources: tuple[str, ...] = DEFAULT_CATALOG_SOURCES
    catalog_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    log_format: str = "json"
    seed: int | None = None

    @classmethod
    def from_env(cls) -> "Config":
        raw_sources = os.environ.get("REGAIN_CATALOG_SOURCES", "")
        sources = tuple(s.strip() for s in raw_sources.split(",") if s.strip())

        log_format = os.environ.get("REGAIN_LOG_FORMAT", "json").strip().lower()
        if log_format not in ("json", "text"):
            raise RuntimeError(f"REGAIN_LOG_FORMAT must be 'json' or 'text', got {log_format!r}")

        raw_seed = os.environ.get("REGAIN_SEED", "").strip()

        return cls(
            catalog_sources=sources or DEFAULT_CATALOG_SOURCES,
            catalog_timeout_seconds=float(
                os.environ.get("REGAIN_CATALOG_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))
            ),
            log_format=log_format,
            seed=int(raw_seed) if raw_seed else None,
        )
