from __future__ import annotations

import os


def pytest_configure() -> None:
    """
    Unit-test defaults for the `backend/tests` suite.

    Settings are read from the environment at import time, so pin the values
    the tests rely on before any test module imports the application.
    """

    os.environ.setdefault("DOCKER_CONTAINER", "true")  # never read a developer .env
    os.environ.setdefault("EDGE_PRIMARY_HOST_MARKER", "example.com")
    os.environ.setdefault("EDGE_ADMIN_HOST_MARKER", "admin.")
    os.environ.setdefault("TRANSLATION_API_URL", "http://translation.test")
    os.environ.setdefault("API_IMAGE_URL", "https://cdn.example.com/uploads/")
