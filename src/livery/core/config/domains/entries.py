"""Domain-specific configuration for build entrypoints."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path

from ..base import BaseDomainConfig


class EntriesConfig(BaseDomainConfig):
    """Accessor for the ``entries`` section.

    Controls the default client/server entries and how per-brand entry names
    and bootstrap module ids are derived from them.
    """

    def _config_section(self) -> str:
        return "entries"

    @cached_property
    def client_entry(self) -> str:
        return self._text("clientEntry", "/src/entry-client.tsx")

    @cached_property
    def server_entry(self) -> str:
        return self._text("serverEntry", "/src/entry-server.tsx")

    @cached_property
    def client_name(self) -> str:
        return self._text("clientName", "main")

    @cached_property
    def server_name(self) -> str:
        return self._text("serverName", "entry-server")

    @cached_property
    def brand_client_prefix(self) -> str:
        return self._text("brandClientPrefix", "brand-", allow_empty=True)

    @cached_property
    def brand_server_prefix(self) -> str:
        return self._text("brandServerPrefix", "entry-server-", allow_empty=True)

    @cached_property
    def bootstrap_dir(self) -> str:
        return self._text("bootstrapDir", "__brand__")

    @cached_property
    def frontier_config_path(self) -> Path:
        return self._project_path(self._text("frontierConfig", "frontier.config.yaml"))


__all__ = ["EntriesConfig"]
