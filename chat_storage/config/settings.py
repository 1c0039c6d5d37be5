"""Application configuration settings"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "on"}


def _env_optional_float(name: str) -> Optional[float]:
    value = os.getenv(name, "").strip()
    return float(value) if value else None


class Config:
    # Service settings
    TESTING = _env_flag("TESTING")
    DEBUG = _env_flag("DEBUG")
    SERVICE_NAME = os.getenv("SERVICE_NAME", "RAG Chat Storage Service")
    SERVICE_VERSION = os.getenv("SERVICE_VERSION", "1.0.0")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_PATH = os.getenv("LOG_PATH") or None
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s [%(levelname)s] [%(correlation_id)s] %(name)s: %(message)s",
    )

    # Auth
    SERVICE_AUTH_SECRET = os.getenv("SERVICE_AUTH_SECRET", "")
    SERVICE_AUTH_ISSUER = os.getenv("SERVICE_AUTH_ISSUER", "your_service_name")
    SERVICE_AUTH_AUDIENCE = os.getenv("SERVICE_AUTH_AUDIENCE", "your_service_audience")

    # Rate limiting (fixed window per user)
    RATE_LIMIT_MAX_REQUESTS = int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "100"))
    RATE_LIMIT_WINDOW_SECONDS = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))
    RATE_LIMIT_KEY_PREFIX = os.getenv("RATE_LIMIT_KEY_PREFIX", "rate_limit:")

    # Completion provider (OpenAI-compatible chat completions endpoint)
    COMPLETION_BASE_URL = os.getenv(
        "COMPLETION_BASE_URL", "https://router.huggingface.co/v1"
    )
    COMPLETION_API_KEY = os.getenv("COMPLETION_API_KEY", "")
    COMPLETION_MODEL = os.getenv(
        "COMPLETION_MODEL", "meta-llama/Llama-3.1-8B-Instruct"
    )
    COMPLETION_SYSTEM_PROMPT = os.getenv(
        "COMPLETION_SYSTEM_PROMPT",
        "You are a helpful AI assistant. "
        "Provide clear, accurate, and concise responses.",
    )
    COMPLETION_MAX_TOKENS = int(os.getenv("COMPLETION_MAX_TOKENS", "512"))
    COMPLETION_TEMPERATURE = float(os.getenv("COMPLETION_TEMPERATURE", "0.7"))
    COMPLETION_TOP_P = float(os.getenv("COMPLETION_TOP_P", "0.9"))
    COMPLETION_MAX_ATTEMPTS = int(os.getenv("COMPLETION_MAX_ATTEMPTS", "2"))
    COMPLETION_RETRY_DELAY_SECONDS = float(
        os.getenv("COMPLETION_RETRY_DELAY_SECONDS", "5")
    )
    COMPLETION_RETRY_DEADLINE_SECONDS = _env_optional_float(
        "COMPLETION_RETRY_DEADLINE_SECONDS"
    )
    COMPLETION_TIMEOUT = float(os.getenv("COMPLETION_TIMEOUT", "60"))
    COMPLETION_CONNECT_TIMEOUT = float(os.getenv("COMPLETION_CONNECT_TIMEOUT", "10"))

    # Domain events (Redis streams)
    EVENTS_SESSION_STREAM = os.getenv("EVENTS_SESSION_STREAM", "chat.session-events")
    EVENTS_MESSAGE_STREAM = os.getenv("EVENTS_MESSAGE_STREAM", "chat.message-events")
    EVENTS_PARTITIONS = int(os.getenv("EVENTS_PARTITIONS", "3"))
    EVENTS_STREAM_MAXLEN = int(os.getenv("EVENTS_STREAM_MAXLEN", "100000"))
    EVENTS_QUEUE_SIZE = int(os.getenv("EVENTS_QUEUE_SIZE", "10000"))
    EVENTS_MAX_DELIVERY_ATTEMPTS = int(os.getenv("EVENTS_MAX_DELIVERY_ATTEMPTS", "3"))
    EVENTS_RETRY_DELAY_SECONDS = float(os.getenv("EVENTS_RETRY_DELAY_SECONDS", "0.5"))
    EVENTS_SHUTDOWN_TIMEOUT_SECONDS = float(
        os.getenv("EVENTS_SHUTDOWN_TIMEOUT_SECONDS", "5")
    )

    # Redis settings
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")

    # Postgresql Database settings (read by Prisma through schema.prisma)
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")

    # Pagination
    SESSION_PAGE_SIZE: int = int(os.getenv("SESSION_PAGE_SIZE", "10"))
    MESSAGE_PAGE_SIZE: int = int(os.getenv("MESSAGE_PAGE_SIZE", "20"))
    MAX_PAGE_SIZE: int = int(os.getenv("MAX_PAGE_SIZE", "100"))


class DevelopmentConfig(Config):
    """Development configuration"""

    DEBUG = True


class TestingConfig(Config):
    """Testing configuration"""

    TESTING = True
    COMPLETION_RETRY_DELAY_SECONDS = 0.0
    EVENTS_RETRY_DELAY_SECONDS = 0.0


class ProductionConfig(Config):
    """Production configuration"""

    pass


# Configuration dictionary
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env=None):
    """Get configuration based on environment"""
    if env is None:
        env = os.getenv("APP_ENV", "development")
    return config.get(env, config["default"])


# ==================== COMPONENT SETTINGS ====================
# Components receive one of these at construction instead of reading Config.


@dataclass(frozen=True)
class RateLimitSettings:
    max_requests: int = 100
    window_seconds: int = 60
    key_prefix: str = "rate_limit:"

    @classmethod
    def from_config(cls, cfg=Config) -> "RateLimitSettings":
        return cls(
            max_requests=cfg.RATE_LIMIT_MAX_REQUESTS,
            window_seconds=cfg.RATE_LIMIT_WINDOW_SECONDS,
            key_prefix=cfg.RATE_LIMIT_KEY_PREFIX,
        )


@dataclass(frozen=True)
class CompletionSettings:
    model: str
    system_prompt: str = (
        "You are a helpful AI assistant. "
        "Provide clear, accurate, and concise responses."
    )
    max_tokens: int = 512
    temperature: float = 0.7
    top_p: float = 0.9
    max_attempts: int = 2
    retry_delay_seconds: float = 5.0
    retry_deadline_seconds: Optional[float] = None

    @classmethod
    def from_config(cls, cfg=Config) -> "CompletionSettings":
        return cls(
            model=cfg.COMPLETION_MODEL,
            system_prompt=cfg.COMPLETION_SYSTEM_PROMPT,
            max_tokens=cfg.COMPLETION_MAX_TOKENS,
            temperature=cfg.COMPLETION_TEMPERATURE,
            top_p=cfg.COMPLETION_TOP_P,
            max_attempts=cfg.COMPLETION_MAX_ATTEMPTS,
            retry_delay_seconds=cfg.COMPLETION_RETRY_DELAY_SECONDS,
            retry_deadline_seconds=cfg.COMPLETION_RETRY_DEADLINE_SECONDS,
        )


@dataclass(frozen=True)
class EventSettings:
    session_stream: str = "chat.session-events"
    message_stream: str = "chat.message-events"
    partitions: int = 3
    stream_maxlen: int = 100000
    queue_size: int = 10000
    max_delivery_attempts: int = 3
    retry_delay_seconds: float = 0.5
    shutdown_timeout_seconds: float = 5.0

    @classmethod
    def from_config(cls, cfg=Config) -> "EventSettings":
        return cls(
            session_stream=cfg.EVENTS_SESSION_STREAM,
            message_stream=cfg.EVENTS_MESSAGE_STREAM,
            partitions=cfg.EVENTS_PARTITIONS,
            stream_maxlen=cfg.EVENTS_STREAM_MAXLEN,
            queue_size=cfg.EVENTS_QUEUE_SIZE,
            max_delivery_attempts=cfg.EVENTS_MAX_DELIVERY_ATTEMPTS,
            retry_delay_seconds=cfg.EVENTS_RETRY_DELAY_SECONDS,
            shutdown_timeout_seconds=cfg.EVENTS_SHUTDOWN_TIMEOUT_SECONDS,
        )
