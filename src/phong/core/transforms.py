"""Host-side construction of 4x4 affine transforms.

Object and camera transforms are built in Python scope with NumPy (float64)
and uploaded to Taichi fields as float32 matrices. Every object transform is a
single composed affine matrix; ``compose_transform`` applies scale first, then
rotation about X, Y and Z, then translation.

Example:
    >>> from src.phong.core.transforms import compose_transform, view_transform
    >>> m = compose_transform(translation=(0.0, 1.0, 0.0), scale=(2.0, 2.0, 2.0))
    >>> view = view_transform((0.0, 1.5, -5.0), (0.0, 1.0, 0.0), (0.0, 1.0, 0.0))
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

Matrix4 = npt.NDArray[np.float64]

# Determinants smaller than this are treated as singular
SINGULAR_EPSILON = 1e-12


def identity() -> Matrix4:
    """Return the 4x4 identity matrix."""
    return np.eye(4, dtype=np.float64)


def translation(x: float, y: float, z: float) -> Matrix4:
    """Return a translation matrix."""
    m = identity()
    m[0, 3] = x
    m[1, 3] = y
    m[2, 3] = z
    return m


def scaling(x: float, y: float, z: float) -> Matrix4:
    """Return a (possibly non-uniform) scaling matrix."""
    return np.diag([x, y, z, 1.0]).astype(np.float64)


def rotation_x(radians: float) -> Matrix4:
    """Return a rotation about the X axis (right-handed)."""
    c, s = math.cos(radians), math.sin(radians)
    m = identity()
    m[1, 1] = c
    m[1, 2] = -s
    m[2, 1] = s
    m[2, 2] = c
    return m


def rotation_y(radians: float) -> Matrix4:
    """Return a rotation about the Y axis (right-handed)."""
    c, s = math.cos(radians), math.sin(radians)
    m = identity()
    m[0, 0] = c
    m[0, 2] = s
    m[2, 0] = -s
    m[2, 2] = c
    return m


def rotation_z(radians: float) -> Matrix4:
    """Return a rotation about the Z axis (right-handed)."""
    c, s = math.cos(radians), math.sin(radians)
    m = identity()
    m[0, 0] = c
    m[0, 1] = -s
    m[1, 0] = s
    m[1, 1] = c
    return m


def shearing(
    xy: float = 0.0,
    xz: float = 0.0,
    yx: float = 0.0,
    yz: float = 0.0,
    zx: float = 0.0,
    zy: float = 0.0,
) -> Matrix4:
    """Return a shearing matrix.

    Each argument moves one coordinate in proportion to another, e.g. ``xy``
    moves x in proportion to y.
    """
    m = identity()
    m[0, 1] = xy
    m[0, 2] = xz
    m[1, 0] = yx
    m[1, 2] = yz
    m[2, 0] = zx
    m[2, 1] = zy
    return m


def compose_transform(
    translation: Sequence[float] = (0.0, 0.0, 0.0),
    rotation: Sequence[float] = (0.0, 0.0, 0.0),
    scale: Sequence[float] = (1.0, 1.0, 1.0),
) -> Matrix4:
    """Compose an object-to-world transform from its components.

    The composition order is fixed: scale, then rotate about X, Y and Z (in
    that order), then translate, i.e. ``T @ Rz @ Ry @ Rx @ S``.

    Args:
        translation: Offset (x, y, z).
        rotation: Euler angles in radians about (x, y, z).
        scale: Per-axis scale factors. Zero factors make the result singular.

    Returns:
        The composed 4x4 matrix.
    """
    t = _translation_matrix(translation)
    r = rotation_z(rotation[2]) @ rotation_y(rotation[1]) @ rotation_x(rotation[0])
    s = scaling(scale[0], scale[1], scale[2])
    return t @ r @ s


def _translation_matrix(offset: Sequence[float]) -> Matrix4:
    return translation(offset[0], offset[1], offset[2])


def view_transform(
    from_point: Sequence[float],
    to_point: Sequence[float],
    up: Sequence[float],
) -> Matrix4:
    """Build a right-handed world-to-camera (view) transform.

    The camera sits at ``from_point`` looking toward ``to_point``; after the
    transform the view direction is -Z and ``up`` maps approximately to +Y.

    Args:
        from_point: Eye position in world space.
        to_point: Point the camera looks at.
        up: Approximate up direction (need not be orthogonal to the view).

    Returns:
        The 4x4 view matrix.

    Raises:
        ValueError: If ``from_point`` equals ``to_point`` or ``up`` is
            parallel to the view direction.
    """
    eye = np.asarray(from_point, dtype=np.float64)
    target = np.asarray(to_point, dtype=np.float64)
    up_vec = np.asarray(up, dtype=np.float64)

    forward = target - eye
    forward_len = np.linalg.norm(forward)
    if forward_len < SINGULAR_EPSILON:
        raise ValueError("View transform requires distinct from/to points")
    forward = forward / forward_len

    left = np.cross(forward, up_vec / np.linalg.norm(up_vec))
    left_len = np.linalg.norm(left)
    if left_len < SINGULAR_EPSILON:
        raise ValueError("Up vector must not be parallel to the view direction")
    left = left / left_len
    true_up = np.cross(left, forward)

    orientation = identity()
    orientation[0, :3] = left
    orientation[1, :3] = true_up
    orientation[2, :3] = -forward
    return orientation @ translation(-eye[0], -eye[1], -eye[2])


def is_invertible(m: npt.ArrayLike) -> bool:
    """Check whether a 4x4 matrix is invertible."""
    arr = np.asarray(m, dtype=np.float64)
    return arr.shape == (4, 4) and abs(float(np.linalg.det(arr))) > SINGULAR_EPSILON


def invert_transform(m: npt.ArrayLike) -> Matrix4:
    """Invert a 4x4 affine matrix.

    Args:
        m: The matrix to invert.

    Returns:
        The inverse matrix.

    Raises:
        ValueError: If the matrix is not 4x4 or is singular.
    """
    arr = np.asarray(m, dtype=np.float64)
    if arr.shape != (4, 4):
        raise ValueError(f"Transform must be a 4x4 matrix, got shape {arr.shape}")
    if not is_invertible(arr):
        raise ValueError("Transform is singular and cannot be inverted")
    return np.linalg.inv(arr)


def as_matrix(m: npt.ArrayLike) -> Matrix4:
    """Validate and copy a transform into a float64 4x4 array.

    Raises:
        ValueError: If the matrix is not 4x4 or is singular.
    """
    arr = np.array(m, dtype=np.float64)
    invert_transform(arr)
    return arr


def as_vec3(value: Sequence[float]) -> tuple[float, float, float]:
    """Validate and convert a 3-component sequence into a float tuple.

    Raises:
        ValueError: If the value does not have exactly three components.
    """
    components = tuple(float(c) for c in value)
    if len(components) != 3:
        raise ValueError(f"Expected 3 components, got {len(components)}")
    return components[0], components[1], components[2]
