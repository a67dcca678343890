from __future__ import annotations

import pytest
from hypothesis import HealthCheck, settings

settings.register_profile(
    "lab",
    max_examples=200,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.load_profile("lab")


@pytest.fixture
def sample_text() -> str:
    return "The cat sat. The dog ran."
