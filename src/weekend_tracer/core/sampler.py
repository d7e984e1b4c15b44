"""Seedable random stream for Monte Carlo sampling.

All randomness in the tracer flows through this module. The stream is a
32-bit xorshift generator whose state lives in a single Taichi field, so
Python code can reseed it between renders and kernels draw from it directly.

Because there is only one state word, draws are only reproducible when they
happen in a fixed order. The render kernels serialize their pixel loops for
exactly that reason.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from weekend_tracer.core.sampler import random_float, seed_random
    >>> seed_random(1234)
    >>> @ti.kernel
    ... def draw() -> ti.f32:
    ...     return random_float()
    >>> draw()  # same value every time after seed_random(1234)
"""

import taichi as ti

# Used when the stream is drawn from before anyone seeded it; xorshift
# never leaves the all-zero state on its own.
_FALLBACK_STATE = 0x6D2B79F5

# 2^-24: maps the top 24 bits of a draw onto [0, 1) exactly in f32
_INV_2_24 = 1.0 / 16777216.0

_rng_state = ti.field(dtype=ti.u32, shape=())


def _seed_to_state(seed: int) -> int:
    """Scramble a user seed into a nonzero 32-bit generator state."""
    state = (seed * 0x9E3779B9 + 0x7F4A7C15) & 0xFFFFFFFF
    state ^= state >> 16
    return state or _FALLBACK_STATE


def seed_random(seed: int) -> None:
    """Reset the random stream.

    Two calls with the same seed produce the same sequence of draws.

    Args:
        seed: Any Python integer. Negative and large values are folded
            into 32 bits.
    """
    _rng_state[None] = _seed_to_state(int(seed))


def get_random_state() -> int:
    """Get the raw generator state.

    Public helper for inspecting the stream, for example to check that a
    render advanced it. The renderer does not call it.
    """
    return int(_rng_state[None])


@ti.func
def _next_u32() -> ti.u32:
    """Advance the xorshift32 state and return it."""
    x = _rng_state[None]
    if x == 0:
        x = ti.cast(_FALLBACK_STATE, ti.u32)
    x ^= x << ti.cast(13, ti.u32)
    x ^= ti.bit_shr(x, ti.cast(17, ti.u32))
    x ^= x << ti.cast(5, ti.u32)
    _rng_state[None] = x
    return x


@ti.func
def random_float() -> ti.f32:
    """Draw a uniform float in [0, 1).

    Returns:
        A value with 24 bits of randomness, strictly less than 1.
    """
    bits = ti.bit_shr(_next_u32(), ti.cast(8, ti.u32))
    return ti.cast(bits, ti.f32) * _INV_2_24


@ti.func
def random_range(min_value: ti.f32, max_value: ti.f32) -> ti.f32:
    """Draw a uniform float in [min_value, max_value).

    Args:
        min_value: Inclusive lower bound.
        max_value: Exclusive upper bound.

    Returns:
        The sampled value.
    """
    return min_value + (max_value - min_value) * random_float()
