"""
Reward schedule and supply cap.

The per-solution reward halves every ``halving_interval`` accepted
solutions. Payouts are truncated so cumulative emission never exceeds
``max_supply``.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from poi.config import ProtocolConfig, get_config
from poi.core import EmissionState

__all__ = ["reward_for", "capped_reward", "apply_claim", "remaining_supply"]

logger = logging.getLogger(__name__)

_MAX_HALVINGS = 64


def reward_for(total_accepted_solutions: int, config: Optional[ProtocolConfig] = None) -> int:
    """Scheduled reward after ``total_accepted_solutions`` claims (before the cap)."""
    cfg = config or get_config()
    halvings = total_accepted_solutions // cfg.halving_interval
    if halvings >= _MAX_HALVINGS:
        return 0
    return cfg.initial_reward >> halvings


def remaining_supply(total_supply: int, config: Optional[ProtocolConfig] = None) -> int:
    """Tokens still mintable before the cap (saturates at 0)."""
    cfg = config or get_config()
    return max(0, cfg.max_supply - total_supply)


def capped_reward(state: EmissionState, config: Optional[ProtocolConfig] = None) -> int:
    """Amount the next claim actually pays: ``min(reward, max_supply - total_supply)``."""
    cfg = config or get_config()
    reward = reward_for(state.total_accepted_solutions, config=cfg)
    return min(reward, remaining_supply(state.total_supply, config=cfg))


def apply_claim(
    state: EmissionState,
    config: Optional[ProtocolConfig] = None,
) -> Tuple[EmissionState, int]:
    """
    Account for one claimed solution.

    Returns:
        (new_state, paid_amount). ``total_accepted_solutions`` always
        advances; ``total_supply`` advances by the capped amount.
    """
    cfg = config or get_config()
    scheduled = reward_for(state.total_accepted_solutions, config=cfg)
    paid = min(scheduled, remaining_supply(state.total_supply, config=cfg))
    if paid < scheduled:
        logger.warning(
            "supply cap truncated reward from %d to %d (total_supply=%d)",
            scheduled,
            paid,
            state.total_supply,
        )
    new_state = EmissionState(
        total_accepted_solutions=state.total_accepted_solutions + 1,
        total_supply=state.total_supply + paid,
    )
    return new_state, paid
