import os
from dataclasses import dataclass

from dotenv import load_dotenv


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    udp_host: str = "127.0.0.1"
    udp_port: int = 3000
    http_host: str = "127.0.0.1"
    http_port: int = 8000
    log_level: str = "INFO"
    max_code_attempts: int = 1000

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``QUTE_*`` environment variables (a local .env is honoured)."""
        load_dotenv()
        return cls(
            udp_host=os.getenv("QUTE_UDP_HOST", cls.udp_host),
            udp_port=_env_int("QUTE_UDP_PORT", cls.udp_port),
            http_host=os.getenv("QUTE_HTTP_HOST", cls.http_host),
            http_port=_env_int("QUTE_HTTP_PORT", cls.http_port),
            log_level=os.getenv("QUTE_LOG_LEVEL", cls.log_level).upper(),
            max_code_attempts=_env_int("QUTE_MAX_CODE_ATTEMPTS", cls.max_code_attempts),
        )


__all__ = ["Settings"]
