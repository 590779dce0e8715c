"""Engine configuration.

EngineConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Engine configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = EngineConfig(port=3000, dev_mode=True)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8080
    workers: int = 1

    # Development: reload templates before every render
    dev_mode: bool = False

    # Templates
    autoescape: bool = True

    # Limits
    max_body_size: int = 16 * 1024 * 1024  # 16 MB

    # TLS (optional)
    ssl_certfile: str | None = None
    ssl_keyfile: str | None = None
