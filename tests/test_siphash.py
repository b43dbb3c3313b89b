import pytest

from sysdyn.siphash import siphash

KEY = bytes(range(16))


def test_reference_vector_empty_64():
    assert siphash(b"", KEY, 8) == bytes.fromhex("310e0edd47db6f72")


def test_reference_vector_15_bytes_64():
    assert siphash(bytes(range(15)), KEY, 8) == bytes.fromhex("e545be4961ca29a1")


def test_reference_vector_empty_128():
    assert siphash(b"", KEY, 16) == bytes.fromhex("a3817f04ba25a8e66df67214c7550293")


@pytest.mark.parametrize("outlen", [8, 16])
@pytest.mark.parametrize("size", [0, 1, 7, 8, 9, 16, 63])
def test_output_length_and_determinism(outlen, size):
    data = bytes(range(size))
    first = siphash(data, KEY, outlen)
    assert len(first) == outlen
    assert siphash(data, KEY, outlen) == first


def test_default_outlen_is_eight():
    assert siphash(b"abc", KEY) == siphash(b"abc", KEY, 8)


def test_key_changes_output():
    other = bytes(reversed(range(16)))
    results = {siphash(b"message", k) for k in (KEY, other)}
    assert len(results) == 2


def test_distinct_inputs_distinct_outputs():
    outputs = {siphash(bytes(range(n)), KEY) for n in range(64)}
    assert len(outputs) == 64


def test_length_is_mixed_in():
    assert len({siphash(b"\x00" * n, KEY) for n in range(1, 17)}) == 16


@pytest.mark.parametrize("outlen", [0, 4, 12, 32])
def test_bad_outlen(outlen):
    with pytest.raises(ValueError):
        siphash(b"", KEY, outlen)


@pytest.mark.parametrize("key", [b"", bytes(15), bytes(17)])
def test_bad_key_length(key):
    with pytest.raises(ValueError):
        siphash(b"", key)