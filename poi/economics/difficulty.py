"""
Difficulty adjustment.

Each epoch the difficulty moves toward the level that yields
``target_solutions`` accepted solutions. The step is log2-dampened, at
least 1 and at most ``max_difficulty_adjustment``; a +/-20% band around the
target leaves it unchanged. All arithmetic is integer-only.
"""

from __future__ import annotations

from typing import Optional

from poi.config import ProtocolConfig, get_config

__all__ = ["log2_ceil", "adjust_difficulty"]

_U64_MASK = (1 << 64) - 1


def log2_ceil(x: int) -> int:
    """
    Integer ceiling of log2 over 64-bit values.

    Returns 0 for ``x <= 1``; otherwise the bit length of ``x - 1``, i.e.
    ``64 - leading_zeros(x - 1)``.
    """
    if x <= 1:
        return 0
    return ((x - 1) & _U64_MASK).bit_length()


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def adjust_difficulty(
    current_difficulty: int,
    solutions_observed: int,
    target: Optional[int] = None,
    config: Optional[ProtocolConfig] = None,
) -> int:
    """
    Compute the next epoch's difficulty.

    Args:
        current_difficulty: Difficulty of the closing epoch
        solutions_observed: Accepted solutions counted for the closing epoch
        target: Desired solutions per epoch; ``config.target_solutions`` by default
        config: Protocol config

    Returns:
        New difficulty within [min_difficulty, max_difficulty], differing
        from ``current_difficulty`` by at most ``max_difficulty_adjustment``

    Raises:
        ValueError: ``target <= 0``, ``solutions_observed < 0`` or
            ``current_difficulty`` outside [min_difficulty, max_difficulty]
    """
    cfg = config or get_config()
    if target is None:
        target = cfg.target_solutions
    if target <= 0:
        raise ValueError(f"target must be positive, got {target}")
    if solutions_observed < 0:
        raise ValueError(f"solutions_observed must be >= 0, got {solutions_observed}")
    if not cfg.min_difficulty <= current_difficulty <= cfg.max_difficulty:
        raise ValueError(
            f"current_difficulty {current_difficulty} outside "
            f"[{cfg.min_difficulty}, {cfg.max_difficulty}]"
        )

    max_step = cfg.max_difficulty_adjustment
    band = target // 5

    if solutions_observed > target + band:
        step = _clamp(log2_ceil(solutions_observed // target), 1, max_step)
        new_difficulty = current_difficulty + step
    elif solutions_observed == 0:
        new_difficulty = current_difficulty - max_step
    elif solutions_observed < target - band:
        step = _clamp(log2_ceil(target // solutions_observed), 1, max_step)
        new_difficulty = current_difficulty - step
    else:
        new_difficulty = current_difficulty

    return _clamp(new_difficulty, cfg.min_difficulty, cfg.max_difficulty)
