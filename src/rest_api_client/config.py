# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Client configuration using pydantic-settings.

Values come from keyword arguments, ``REST_API_CLIENT_*`` environment
variables or a ``.env`` file, in that order of precedence.
"""

from __future__ import annotations

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ("ClientConfig",)


class ClientConfig(BaseSettings, frozen=True):
    """Base URL and credentials consumed by the request rewriter.

    The access token is a ``SecretStr`` so it never shows up in reprs or
    logs.
    """

    model_config = SettingsConfigDict(
        env_prefix="REST_API_CLIENT_",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    url: str
    access_token: SecretStr | None = None

    # Transport options
    timeout_s: float | None = None
    verify_ssl: bool = True
    follow_redirects: bool = False

    @field_validator("url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    def token(self) -> str | None:
        """Plain access token, or None when unset or empty."""
        if self.access_token is None:
            return None
        return self.access_token.get_secret_value() or None
