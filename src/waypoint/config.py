"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(raise_on_not_found=True, log_level="debug")
    """

    # Dispatch
    raise_errors: bool = True  # False: log handler exceptions, report FAILED
    raise_on_not_found: bool = False

    # Startup
    generate_request_on_page_load: bool = False

    # Logging — applied to the "waypoint" logger when set
    log_level: str | None = None
