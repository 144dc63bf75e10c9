"""Tests for the flexspacecraft.config module."""

import jax.numpy as jnp
import pytest

from flexspacecraft.config import get_dtype, get_quaternion_tolerance, set_dtype
from flexspacecraft.frames import rotation_eci_to_body


@pytest.fixture(autouse=True)
def reset_dtype():
    """Restore float64 after each test."""
    yield
    set_dtype(jnp.float64)


class TestGetSetDtype:
    def test_default_dtype(self):
        assert get_dtype() == jnp.float64

    def test_set_float32(self):
        set_dtype(jnp.float32)
        assert get_dtype() == jnp.float32

    def test_set_float16(self):
        set_dtype(jnp.float16)
        assert get_dtype() == jnp.float16

    def test_set_bfloat16(self):
        set_dtype(jnp.bfloat16)
        assert get_dtype() == jnp.bfloat16

    def test_roundtrip(self):
        for dtype in (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64):
            set_dtype(dtype)
            assert get_dtype() == dtype

    def test_invalid_dtype_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype(jnp.int32)

    def test_invalid_dtype_string_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype("float32")


class TestQuaternionTolerance:
    def test_float64(self):
        assert get_quaternion_tolerance() == 1e-9

    def test_float32(self):
        set_dtype(jnp.float32)
        assert get_quaternion_tolerance() == 1e-5

    def test_half_precision(self):
        for dtype in (jnp.float16, jnp.bfloat16):
            set_dtype(dtype)
            assert get_quaternion_tolerance() == 1e-2


class TestDtypePropagation:
    def test_kernel_output_follows_dtype(self):
        """Kernels produce arrays of the configured dtype."""
        set_dtype(jnp.float32)
        C = rotation_eci_to_body(jnp.array([0.0, 0.0, 0.0, 1.0]))
        assert C.dtype == jnp.float32

    def test_kernel_output_float64(self):
        C = rotation_eci_to_body(jnp.array([0.0, 0.0, 0.0, 1.0]))
        assert C.dtype == jnp.float64
