"""Global test configuration for unistring tests."""

import pytest

from unistring.core.config import SETTINGS


@pytest.fixture(autouse=True)
def restore_settings():
    """Undo changes made to the shared SETTINGS (CLI invocations rewrite it)."""
    saved = SETTINGS.model_dump()
    yield
    for name, value in saved.items():
        setattr(SETTINGS, name, value)
