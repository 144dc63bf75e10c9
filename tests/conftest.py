import jax.numpy as jnp
import pytest

from flexspacecraft.config import set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision before every test.

    Tests that change the dtype (e.g. test_config.py) restore it in their
    own fixtures; this keeps every other test on float64 regardless of
    execution order or pytest-xdist worker.
    """
    set_dtype(jnp.float64)
