"""Coordinate frame value type and frame algebra.

A :class:`Frame` is an orthonormal triad ``(x, y, z)`` of unit vectors,
all expressed in a common parent frame (usually ECI).  It is immutable:
:func:`rotate` and :func:`difference` return new frames.

Internally the triad is stored as a ``(3, 3)`` array whose *rows* are
the ``x``, ``y`` and ``z`` axes.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from flexspacecraft.config import get_dtype


class Frame:
    """Orthonormal coordinate triad.

    This class is registered as a JAX pytree with the ``(3, 3)`` data
    array as the sole leaf and no auxiliary data, so frames can be passed
    through ``jax.jit`` and ``jax.lax`` control flow.

    Args:
        x: First axis, shape ``(3,)``.
        y: Second axis, shape ``(3,)``.
        z: Third axis, shape ``(3,)``.

    Raises:
        ValueError: If an axis is not a 3-vector or holds non-finite values.

    Examples:
        ```python
        frame = Frame([1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0])
        frame.z
        ```
    """

    __slots__ = ('_data',)

    def __init__(self, x: ArrayLike, y: ArrayLike, z: ArrayLike) -> None:
        _float = get_dtype()
        axes = []
        for name, v in (("x", x), ("y", y), ("z", z)):
            v = jnp.asarray(v, dtype=_float)
            if v.shape != (3,):
                raise ValueError(f"Frame axis '{name}' must have shape (3,), got {v.shape}")
            axes.append(v)
        data = jnp.stack(axes)
        if not isinstance(data, jax.core.Tracer) and not bool(jnp.all(jnp.isfinite(data))):
            raise ValueError("Frame axes must be finite")
        self._data = data

    @classmethod
    def _from_internal(cls, data: Array) -> Frame:
        """Create from a raw ``(3, 3)`` array without validation.

        Used by pytree unflatten and frame algebra outputs.
        """
        obj = object.__new__(cls)
        obj._data = data
        return obj

    @classmethod
    def from_matrix(cls, m: ArrayLike) -> Frame:
        """Create from a ``(3, 3)`` matrix whose rows are the axes.

        Args:
            m: Array of shape ``(3, 3)``.

        Returns:
            Frame: New frame.
        """
        m = jnp.asarray(m, dtype=get_dtype())
        if m.shape != (3, 3):
            raise ValueError(f"Frame matrix must have shape (3, 3), got {m.shape}")
        return cls(m[0], m[1], m[2])

    # Properties

    @property
    def x(self) -> Array:
        """First axis."""
        return self._data[0]

    @property
    def y(self) -> Array:
        """Second axis."""
        return self._data[1]

    @property
    def z(self) -> Array:
        """Third axis."""
        return self._data[2]

    def to_matrix(self) -> Array:
        """Return the axes as rows of a ``(3, 3)`` array."""
        return self._data

    def is_orthonormal(self, tol: float = 1e-9) -> bool:
        """Check that the axes are unit length and mutually orthogonal.

        Args:
            tol: Absolute tolerance on ``M @ M.T - I``.

        Returns:
            bool: ``True`` if the triad is orthonormal within *tol*.
        """
        m = self._data
        return bool(jnp.all(jnp.abs(m @ m.T - jnp.eye(3)) <= tol))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Frame):
            return NotImplemented
        return bool(jnp.allclose(self._data, other._data, atol=1e-12))

    def __repr__(self) -> str:
        return (
            f"Frame(x={self._data[0].tolist()}, "
            f"y={self._data[1].tolist()}, "
            f"z={self._data[2].tolist()})"
        )


def rotate(C: ArrayLike, frame: Frame) -> Frame:
    """Apply a transformation matrix to each axis of a frame.

    Each axis is transformed independently: ``x' = C @ x`` and likewise
    for ``y`` and ``z``.  Rotation composes as matrix multiplication:
    ``rotate(A, rotate(B, f)) == rotate(A @ B, f)``.

    Args:
        C: Transformation matrix of shape ``(3, 3)``.
        frame: Frame to transform.

    Returns:
        Frame: Transformed frame.

    Examples:
        ```python
        from flexspacecraft.frames import Rz, eci_frame
        rotated = rotate(Rz(0.5), eci_frame())
        ```
    """
    C = jnp.asarray(C, dtype=get_dtype())
    if C.shape != (3, 3):
        raise ValueError(f"Transformation matrix must have shape (3, 3), got {C.shape}")
    return Frame._from_internal(frame._data @ C.T)


def difference(a: Frame, b: Frame) -> Frame:
    """Axis-wise difference ``a - b`` of two frames.

    The result is generally not orthonormal; it is meant for diagnostics
    and plotting, not for dynamics.

    Args:
        a: Minuend frame.
        b: Subtrahend frame.

    Returns:
        Frame: Frame holding ``(a.x - b.x, a.y - b.y, a.z - b.z)``.
    """
    return Frame._from_internal(a._data - b._data)


def eci_frame() -> Frame:
    """Return the Earth-Centered Inertial reference frame.

    The ECI axes are the canonical basis of the inertial coordinates in
    which every other frame is expressed.

    Returns:
        Frame: ``x = [1, 0, 0]``, ``y = [0, 1, 0]``, ``z = [0, 0, 1]``.
    """
    return Frame._from_internal(jnp.eye(3, dtype=get_dtype()))


# Register as JAX pytree
jax.tree_util.register_pytree_node(
    Frame,
    lambda f: ((f._data,), None),
    lambda _, children: Frame._from_internal(children[0]),
)
