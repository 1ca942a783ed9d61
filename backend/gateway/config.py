"""
Receptor Gateway: Application Configuration
============================================

What:  Environment-driven settings for the gateway, loaded with Pydantic Settings.
How:   Reads environment variables (or a .env file), validates them, and
       exposes a module-level `settings` object.
Who:   Read by main.py when the middleware chain is assembled. The middleware
       classes themselves never import this module; they receive their
       configuration as constructor arguments.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Gateway settings.

    Every decorator in the chain is off by default and switched on by
    configuring it:
        CORS_ENABLED=true          → CORS middleware
        AUTH_COOKIE_NAME=<name>    → cookie-to-Authorization bridge
        BASIC_AUTH_USERNAME=<user> → Basic auth (with BASIC_AUTH_PASSWORD)
    """

    # ── CORS ──────────────────────────────────────────────────────────────
    # What: Turns on echo-the-origin CORS with credentials allowed
    # Off: Browsers on other origins cannot read responses
    cors_enabled: bool = Field(default=False)

    # ── Authentication ────────────────────────────────────────────────────
    # What: Cookie whose value is copied into the Authorization header
    # Format: Full header value, e.g. "Basic dXNlcjpwYXNz"
    # Empty: Bridge disabled, Authorization passes through untouched
    auth_cookie_name: str = Field(default="")

    # What: The single account accepted by Basic auth
    # Empty username: Basic auth disabled, every request reaches the handler
    # Compared byte for byte, case-sensitive, in constant time
    basic_auth_username: str = Field(default="")
    basic_auth_password: str = Field(default="")

    # ── Server ────────────────────────────────────────────────────────────
    # What: Bind address for `python -m gateway`
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8888, ge=1, le=65535)

    # What: Root logger level; gateway.access and the middleware loggers inherit it
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    # DEBUG shows preflights and cookie bridging; INFO shows one line per request
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    @property
    def basic_auth_enabled(self) -> bool:
        return bool(self.basic_auth_username)

    @property
    def cookie_name(self) -> Optional[str]:
        """
        What: The bridge cookie name, or None when the bridge is off.
        Why property: wrap_handler takes None to mean "no cookie bridge".
        """
        return self.auth_cookie_name or None

    def validate_required_for_production(self) -> None:
        """
        Raise ValueError describing every inconsistent setting.

        Called from the application lifespan; a username without a password
        would accept "user:" as valid credentials.
        """
        errors = []
        if self.basic_auth_username and not self.basic_auth_password:
            errors.append(
                "BASIC_AUTH_USERNAME is set but BASIC_AUTH_PASSWORD is empty."
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


settings = Settings()
