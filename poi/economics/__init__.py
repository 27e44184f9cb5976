"""Epoch economics: difficulty, emission and seed rotation."""

from poi.economics.difficulty import adjust_difficulty, log2_ceil
from poi.economics.emission import apply_claim, capped_reward, remaining_supply, reward_for
from poi.economics.rotation import EpochRotation, initial_epoch, next_seed, rotate_epoch

__all__ = [
    "EpochRotation",
    "adjust_difficulty",
    "apply_claim",
    "capped_reward",
    "initial_epoch",
    "log2_ceil",
    "next_seed",
    "remaining_supply",
    "reward_for",
    "rotate_epoch",
]
