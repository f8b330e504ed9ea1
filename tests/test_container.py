import logging
import random
from io import BytesIO

import pytest

from huffcodec.constants import ENTRY_SIZE, HEADER_SIZE, MAGIC, SENTINEL
from huffcodec.container import HuffmanCoder, is_container, read_header, write_header
from huffcodec.errors import MalformedContainer, NotEncoded, WouldNotShrink
from huffcodec.frequency import build_frequency_table
from huffcodec.guard import check_would_shrink, estimate_size
from huffcodec.tree import build_tree, derive_codes

TEXT = (b"Huffman coding assigns short codewords to frequent bytes and long "
	b"codewords to rare ones, so typical text shrinks noticeably. ") * 40

REPETITIVE = b"abcabcabd " * 1000


def _le(n):
	return n.to_bytes(4, "little")


def _header(entries, count=None):
	n = len(entries) if count is None else count
	out = _le(MAGIC) + _le(n)
	for sym, c in entries:
		out += bytes([sym]) + _le(c)
	return out


def test_roundtrip_text():
	coder = HuffmanCoder()
	blob = coder.encode(TEXT)
	assert len(blob) < len(TEXT)
	assert coder.decode(blob) == TEXT


def test_roundtrip_all_bytes_except_sentinel():
	coder = HuffmanCoder()
	data = bytes(b for b in range(256) if b != SENTINEL) * 4
	assert coder.decode(coder.encode(data, check_size=False)) == data


def test_roundtrip_random_bytes():
	rng = random.Random(1234)
	data = bytes(b for b in (rng.getrandbits(8) for _ in range(5000)) if b != SENTINEL)
	coder = HuffmanCoder()
	assert coder.decode(coder.encode(data, check_size=False)) == data


def test_scenario_a_is_abandoned():
	with pytest.raises(WouldNotShrink) as info:
		HuffmanCoder().encode(b"aaaa")
	assert info.value.original_size == 4
	assert info.value.estimated_size == 19


def test_scenario_b_repetitive_file_shrinks():
	coder = HuffmanCoder()
	blob = coder.encode(REPETITIVE)
	assert len(REPETITIVE) == 10000
	assert len(blob) < 10000
	assert coder.decode(blob) == REPETITIVE


def test_scenario_c_empty_input():
	coder = HuffmanCoder()
	with pytest.raises(WouldNotShrink):
		coder.encode(b"")
	blob = coder.encode(b"", check_size=False)
	assert blob == _header([(SENTINEL, 1)]) + b"\x00"
	assert coder.decode(blob) == b""


def test_skewed_two_symbol_input_never_crashes():
	coder = HuffmanCoder()
	for data in (b"a" * 40 + b"b", b"ab", b"a" * 5000 + b"b" * 3):
		try:
			blob = coder.encode(data)
		except WouldNotShrink:
			continue
		assert len(blob) < len(data)
		assert coder.decode(blob) == data


def test_deterministic_output():
	assert HuffmanCoder().encode(TEXT) == HuffmanCoder().encode(TEXT)


def test_header_layout():
	blob = HuffmanCoder().encode(REPETITIVE)
	freq = build_frequency_table(REPETITIVE)
	assert blob[:4] == _le(MAGIC)
	assert blob[4:8] == _le(len(freq))
	assert blob[8] == SENTINEL
	assert blob[9:13] == _le(1)
	parsed, offset = read_header(blob)
	assert parsed == freq
	assert offset == HEADER_SIZE + len(freq) * ENTRY_SIZE


def test_estimate_matches_container_length():
	for data in (TEXT, REPETITIVE, b"xyz" * 30):
		freq = build_frequency_table(data)
		table = derive_codes(build_tree(freq))
		blob = HuffmanCoder().encode(data, check_size=False)
		assert estimate_size(freq, table) == len(blob)
		assert check_would_shrink(len(data), freq, table) == len(blob)


@pytest.mark.parametrize("blob", [b"", b"\x00\x01", b"hello world", _le(MAGIC + 1) + b"\x00" * 20])
def test_not_encoded(blob):
	assert not is_container(blob)
	with pytest.raises(NotEncoded):
		HuffmanCoder().decode(blob)


def test_truncated_entries():
	blob = HuffmanCoder().encode(REPETITIVE)
	with pytest.raises(MalformedContainer):
		HuffmanCoder().decode(blob[:12])
	with pytest.raises(MalformedContainer):
		HuffmanCoder().decode(blob[:6])


def test_missing_payload():
	blob = HuffmanCoder().encode(REPETITIVE)
	_, offset = read_header(blob)
	with pytest.raises(MalformedContainer):
		HuffmanCoder().decode(blob[:offset])


@pytest.mark.parametrize("blob", [
	_header([], count=0),
	_header([(SENTINEL, 1)], count=300),
	_header([(SENTINEL, 1), (SENTINEL, 2)]) + b"\x00",
	_header([(SENTINEL, 1), (97, 0)]) + b"\x00",
	_header([(97, 4), (98, 1)]) + b"\x00",
])
def test_malformed_tables(blob):
	with pytest.raises(MalformedContainer):
		HuffmanCoder().decode(blob)


def test_sentinel_in_content_truncates(caplog):
	data = b"ab\rcd" * 200
	with caplog.at_level(logging.WARNING, logger="huffcodec.container"):
		blob = HuffmanCoder().encode(data)
	assert "decoding will stop" in caplog.text
	assert HuffmanCoder().decode(blob) == b"ab"


def test_sentinel_entry_counts_natural_occurrences_plus_one():
	blob = HuffmanCoder().encode(b"ab\rcd" * 200)
	freq, _ = read_header(blob)
	assert freq[SENTINEL] == 201


def test_guarded_encode_length_matches_estimate():
	for data in (TEXT, REPETITIVE):
		freq = build_frequency_table(data)
		table = derive_codes(build_tree(freq))
		assert len(HuffmanCoder().encode(data)) == estimate_size(freq, table)


def test_count_overflow_rejected():
	with pytest.raises(ValueError):
		write_header(BytesIO(), {SENTINEL: 1, 97: 2**32})
