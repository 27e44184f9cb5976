import pytest

from poi.verify.pow import check_difficulty, leading_zero_bits


def _digest_with_leading_zeros(bits):
    """Digest whose first set bit sits right after ``bits`` zero bits."""
    return (1 << (255 - bits)).to_bytes(32, "big")


def test_difficulty_zero_always_passes():
    assert check_difficulty(b"\xff" * 32, 0)
    assert check_difficulty(bytes(32), 0)


def test_difficulty_256_always_fails():
    assert not check_difficulty(bytes(32), 256)
    assert not check_difficulty(bytes(32), 1000)


def test_all_zero_digest_passes_up_to_255():
    assert check_difficulty(bytes(32), 255)


@pytest.mark.parametrize("d", [1, 4, 7, 8, 9, 15, 16, 20, 63, 64, 100, 200, 254])
def test_boundary_bit(d):
    digest = _digest_with_leading_zeros(d)
    assert leading_zero_bits(digest) == d
    assert check_difficulty(digest, d)
    assert not check_difficulty(digest, d + 1)


def test_partial_byte_mask():
    digest = bytes([0x00, 0x0F]) + b"\xff" * 30
    assert check_difficulty(digest, 12)
    assert not check_difficulty(digest, 13)


def test_rejects_wrong_digest_size():
    with pytest.raises(ValueError):
        check_difficulty(b"\x00" * 31, 4)


def test_rejects_negative_difficulty():
    with pytest.raises(ValueError):
        check_difficulty(bytes(32), -1)


def test_leading_zero_bits_of_zero_digest():
    assert leading_zero_bits(bytes(32)) == 256
