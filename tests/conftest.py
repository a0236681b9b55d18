import pytest

from hofstadterheart import PipelineConfig


@pytest.fixture
def small_config():
    """Ten indices: every value hand-checkable, z is 0 everywhere."""
    return PipelineConfig(n_max=10, step=1)
