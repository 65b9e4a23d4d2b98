"""Lazy construction of the shared backend handle."""

from __future__ import annotations

import threading
from typing import Callable

from saanify_automation.settings import Settings

from .base import BackendClient


def supabase_factory(settings: Settings) -> Callable[[], BackendClient]:
    def build() -> BackendClient:
        from .supabase_backend import SupabaseBackend

        return SupabaseBackend(settings.supabase_url, settings.supabase_service_role_key)

    return build


class BackendProvider:
    """Builds the backend on first use and hands out the same instance.

    A configuration error is raised on every call until the backend can be
    built, so tasks that need it fail while unrelated tasks keep working.
    """

    def __init__(self, factory: Callable[[], BackendClient]):
        self._factory = factory
        self._backend: BackendClient | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "BackendProvider":
        return cls(supabase_factory(settings))

    @classmethod
    def of(cls, backend: BackendClient) -> "BackendProvider":
        return cls(lambda: backend)

    def get(self) -> BackendClient:
        with self._lock:
            if self._backend is None:
                self._backend = self._factory()
            return self._backend
