"""Infrastructure resources: HTTP session and local storage.

This module is part of the infra layer and must not import from application features.
"""
from typing import Iterator

import requests

from infra.storage import LocalStorage


def http_session_resource() -> Iterator[requests.Session]:
    """Shared HTTP session for backend calls, closed on shutdown."""
    session = requests.Session()
    try:
        yield session
    finally:
        session.close()


def local_storage_resource(directory: str) -> LocalStorage:
    """Local key-value storage rooted at ``directory``."""
    return LocalStorage(directory)
