import hashlib

import pytest

from poi.core import ClockReading, EmissionState, EpochParameters
from poi.crypto.hashing import genesis_seed, solution_digest
from poi.economics.rotation import initial_epoch, next_seed, rotate_epoch
from poi.errors import EpochNotEndedError


def test_next_seed_byte_layout():
    prev = bytes(range(32))
    expected = hashlib.sha3_256(
        prev
        + (1_700_000_600).to_bytes(8, "little", signed=True)
        + (7).to_bytes(8, "little")
        + (123_456).to_bytes(8, "little")
    ).digest()
    assert next_seed(prev, 7, 1_700_000_600, 123_456) == expected


def test_next_seed_depends_on_every_input():
    prev = bytes(32)
    base = next_seed(prev, 1, 100, 1_000)
    assert next_seed(prev, 2, 100, 1_000) != base
    assert next_seed(prev, 1, 101, 1_000) != base
    assert next_seed(prev, 1, 100, 1_001) != base
    assert next_seed(b"\x01" + bytes(31), 1, 100, 1_000) != base
    assert next_seed(prev, 1, 100, 1_000) == base


def test_genesis_seed_layout():
    expected = hashlib.sha3_256(
        (42).to_bytes(8, "little") + (1_000).to_bytes(8, "little", signed=True) + b"mine_state"
    ).digest()
    assert genesis_seed(42, 1_000, b"mine_state") == expected


def test_solution_digest_layout(village_seed, miner):
    text = b"some text"
    expected = hashlib.sha3_256(
        village_seed + miner + text + b"||" + (99).to_bytes(8, "little")
    ).digest()
    assert solution_digest(village_seed, miner, text, 99) == expected


def test_initial_epoch(village_seed, clock, config):
    params = initial_epoch(village_seed, clock)
    assert params.difficulty == config.initial_difficulty
    assert params.epoch_number == 0
    assert params.epoch_end - params.epoch_start == config.epoch_duration


def test_rotate_before_end_refused(village_params):
    early = ClockReading(slot=5, unix_timestamp=village_params.epoch_end - 1)
    with pytest.raises(EpochNotEndedError):
        rotate_epoch(village_params, 50, early)


def test_rotate_epoch(village_params, config):
    clock = ClockReading(slot=2_000, unix_timestamp=village_params.epoch_end + 3)
    rotation = rotate_epoch(village_params, 200, clock, emission=EmissionState())
    current = rotation.current
    assert current.epoch_number == village_params.epoch_number + 1
    assert current.difficulty == 6
    assert rotation.difficulty_delta == 2
    assert current.epoch_start == clock.unix_timestamp
    assert current.epoch_end == clock.unix_timestamp + config.epoch_duration
    assert current.challenge_seed == next_seed(
        village_params.challenge_seed,
        village_params.epoch_number,
        clock.unix_timestamp,
        clock.slot,
    )
    assert rotation.next_reward == config.initial_reward
    assert rotation.to_dict()["new_difficulty"] == 6


def test_rotation_at_exact_end_allowed(village_params):
    clock = ClockReading(slot=1, unix_timestamp=village_params.epoch_end)
    rotation = rotate_epoch(village_params, 0, clock)
    assert rotation.current.difficulty == 4


def test_epoch_parameters_validation(village_seed):
    with pytest.raises(ValueError):
        EpochParameters(difficulty=4, epoch_number=0, epoch_start=0, epoch_end=10, challenge_seed=b"x")
    with pytest.raises(ValueError):
        EpochParameters(difficulty=4, epoch_number=0, epoch_start=10, epoch_end=0, challenge_seed=village_seed)
