# tests/conftest.py
import pytest

from poi.config import DEFAULT_CONFIG, get_config
from poi.core import ClockReading, EpochParameters

# Two sentences: 34 words ending in '.', 10 words ending in '?'.
# "weather" at 4..11, "nature" at 254..260.
TWO_SENTENCE_TEXT = (
    "The weather across the northern highlands remained unusually gentle, and "
    "experienced farmers there spent their afternoons wandering through the green "
    "fields, watching another distant storm drift over the water toward the ancient "
    "stone bridge. Where does Nature hide her answers for curious people, Jack?"
)

# "other" right before the only standalone "the".
OTHER_THE_TEXT = (
    "Farmers across our valley helped each other the whole winter, gathering "
    "firewood, mending fences and sharing warm bread whenever another heavy storm "
    "arrived from northern mountains beyond their quiet village. Have you ever "
    "wondered why such kindness feels rare today?"
)

# Contains "morning", "nature", "ancient" in that order, well spaced.
VILLAGE_TEXT = (
    "Every morning the villagers walked down to the river and talked about the "
    "weather before starting their work. Have you ever noticed how nature seems to "
    "answer patient people with small gifts of beauty? Near the ancient mill there "
    "stood a garden where children gathered berries, painted stones and listened to "
    "stories their grandparents shared under the shade of tall oak trees. Evening "
    "came slowly over the quiet hills."
)

# Seed whose first three byte pairs select lexicon entries 57, 39 and 157:
# "morning", "nature", "ancient".
VILLAGE_SEED = bytes([0, 57, 0, 39, 0, 157]) + bytes(26)

MINER = bytes(range(32))


@pytest.fixture(autouse=True)
def _reset_config_cache():
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def config():
    return DEFAULT_CONFIG


@pytest.fixture
def two_sentence_text():
    return TWO_SENTENCE_TEXT.encode("ascii")


@pytest.fixture
def village_text():
    return VILLAGE_TEXT.encode("ascii")


@pytest.fixture
def miner():
    return MINER


@pytest.fixture
def village_params():
    return EpochParameters(
        difficulty=4,
        epoch_number=0,
        epoch_start=1_700_000_000,
        epoch_end=1_700_000_600,
        challenge_seed=VILLAGE_SEED,
    )


@pytest.fixture
def clock():
    return ClockReading(slot=1_000, unix_timestamp=1_700_000_000)


@pytest.fixture
def other_the_text():
    return OTHER_THE_TEXT.encode("ascii")


@pytest.fixture
def village_seed():
    return VILLAGE_SEED
