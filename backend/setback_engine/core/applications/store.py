"""In-process application store.

Applications live for the lifetime of the process; durable storage belongs
to an external collaborator.
"""

from __future__ import annotations

import threading

from setback_engine.core.applications.application import Application
from setback_engine.core.errors import ApplicationNotFoundError


class ApplicationStore:
    def __init__(self) -> None:
        self._applications: dict[str, Application] = {}
        self._lock = threading.Lock()

    def add(self, application: Application) -> Application:
        with self._lock:
            self._applications[application.id] = application
        return application

    def get(self, application_id: str) -> Application:
        try:
            return self._applications[application_id]
        except KeyError:
            raise ApplicationNotFoundError(application_id) from None

    def __len__(self) -> int:
        return len(self._applications)
