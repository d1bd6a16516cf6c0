# Copyright 2025 Berkan Tali
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Scalar types, narrowing and tolerance helpers shared by the geometry primitives."""

import numpy as np

# Metric computations run in this type regardless of the coordinate type.
EXTENDED_DTYPE = np.dtype(np.float64)

ROUNDING_ERROR_S32 = 0
ROUNDING_ERROR_F32 = 1e-6
ROUNDING_ERROR_F64 = 1e-8


def resolve_dtype(dtype):
    """
    Normalize a dtype specifier and check that it is a supported scalar type.

    Args:
        dtype: Anything accepted by np.dtype (e.g. 'int32', np.float64)

    Returns
    -------
    np.dtype
        The normalized dtype

    Raises
    ------
    ValueError
        If the dtype is not a signed integer or floating point type

    """
    try:
        dtype = np.dtype(dtype)
    except TypeError as e:
        raise ValueError(f"Unknown scalar type: {dtype!r}") from e

    if not (np.issubdtype(dtype, np.signedinteger) or np.issubdtype(dtype, np.floating)):
        raise ValueError(f"Scalar type must be a signed integer or float, got {dtype}")
    return dtype


def is_integer_dtype(dtype):
    """Return True for integer scalar types."""
    return np.issubdtype(dtype, np.integer)


def narrow(value, dtype):
    """
    Convert an extended-precision value back to the scalar type `dtype`.

    Integer types truncate toward zero, float32 rounds to nearest.

    Returns
    -------
    np.generic
        Scalar of type `dtype`

    """
    return np.asarray(value).astype(dtype)[()]


def rounding_error(dtype):
    """Absolute tolerance suited to `dtype`."""
    dtype = resolve_dtype(dtype)
    if is_integer_dtype(dtype):
        return ROUNDING_ERROR_S32
    if dtype == np.float32:
        return ROUNDING_ERROR_F32
    return ROUNDING_ERROR_F64


def relative_error_factor(dtype):
    """Multiple of machine epsilon accepted by equals_relative for `dtype`."""
    dtype = resolve_dtype(dtype)
    if is_integer_dtype(dtype):
        return 1
    if dtype == np.float32:
        return 4
    return 8


def nearly_equal(a, b, tolerance=ROUNDING_ERROR_F32):
    """Absolute-tolerance scalar comparison."""
    return bool(abs(a - b) <= tolerance)


def equals_relative(a, b, factor=None, dtype=None):
    """
    Compare two scalars with a tolerance proportional to their magnitude.

    Integer types compare exactly. For floating types the accepted
    difference is max(|a|, |b|) * factor * eps(dtype).

    Args:
        a, b: Scalars to compare
        factor: Multiple of machine epsilon (default from relative_error_factor)
        dtype: Scalar type whose epsilon is used (default: result type of a and b)

    Returns
    -------
    bool
        True if a and b are equal within the relative tolerance

    """
    dtype = resolve_dtype(np.result_type(a, b) if dtype is None else dtype)
    if is_integer_dtype(dtype):
        return bool(a == b)
    if factor is None:
        factor = relative_error_factor(dtype)

    a = float(a)
    b = float(b)
    max_magnitude = max(abs(a), abs(b))
    return abs(a - b) <= max_magnitude * factor * float(np.finfo(dtype).eps)
