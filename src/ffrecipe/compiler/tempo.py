"""Audio tempo chains.

A single ``atempo`` stage only accepts factors in ``[0.5, 2.0]``. Larger
or smaller factors are decomposed into a chain of bounded stages whose
product equals the requested factor.
"""

from __future__ import annotations

from ffrecipe.exceptions import PreconditionError
from ffrecipe.values._common import format_number

TEMPO_MIN = 0.5
TEMPO_MAX = 2.0

# Remainders this close to 1.0 are dropped from pitch-preserving chains
UNITY_TOLERANCE = 0.01


def tempo_stages(factor: float) -> list[float]:
    """Decompose ``factor`` into stage factors, each within the atempo range.

    Example:
        >>> tempo_stages(9.0)
        [2.0, 2.0, 2.0, 1.125]
    """
    if factor <= 0:
        raise PreconditionError(f"Invalid speed factor: {factor}")
    stages: list[float] = []
    remaining = factor
    while remaining > TEMPO_MAX:
        stages.append(TEMPO_MAX)
        remaining /= TEMPO_MAX
    while remaining < TEMPO_MIN:
        stages.append(TEMPO_MIN)
        remaining /= TEMPO_MIN
    stages.append(remaining)
    return stages


def atempo_chain(factor: float) -> str:
    """Render a comma-joined atempo chain; the last stage has six decimals."""
    *bounded, final = tempo_stages(factor)
    parts = [f"atempo={stage:.1f}" for stage in bounded]
    parts.append(f"atempo={final:.6f}")
    return ",".join(parts)


def atempo_chain_keep_pitch(factor: float) -> str:
    """Render a chain that omits a near-unity final stage.

    Returns ``anull`` when nothing is left to do.
    """
    *bounded, final = tempo_stages(factor)
    parts = [f"atempo={stage:.1f}" for stage in bounded]
    if abs(final - 1.0) > UNITY_TOLERANCE:
        parts.append(f"atempo={format_number(final)}")
    return ",".join(parts) or "anull"
