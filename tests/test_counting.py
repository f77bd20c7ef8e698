from __future__ import annotations

import io
from collections.abc import Iterator

import httpx
import pytest

from spinarak.core.counting import count_occurrences
from spinarak.errors import ScanError


def test_counts_exact_matches() -> None:
    assert count_occurrences("cat", ["a cat sat on a cat mat"]) == 2


def test_empty_stream_counts_zero() -> None:
    assert count_occurrences("cat", []) == 0
    assert count_occurrences("cat", [""]) == 0
    assert count_occurrences("cat", [b""]) == 0


def test_match_is_case_sensitive() -> None:
    assert count_occurrences("Cat", ["cat cat"]) == 0
    assert count_occurrences("cat", ["Cat CAT cat"]) == 1


def test_punctuation_is_part_of_the_token() -> None:
    assert count_occurrences("cat", ["cat, cat. cat"]) == 1


def test_any_whitespace_run_separates_tokens() -> None:
    text = "  cat\tcat\n\ncat \r\n cat\x0bcat\x0c  "
    assert count_occurrences("cat", [text]) == 5


def test_unicode_whitespace_separates_tokens() -> None:
    assert count_occurrences("cat", ["cat cat\u3000cat"]) == 3


def test_token_split_across_chunks_is_rejoined() -> None:
    chunks = [b"a c", b"a", b"t sat ca", b"t", b" cat"]
    assert count_occurrences("cat", chunks) == 3


def test_chunk_boundary_on_whitespace() -> None:
    assert count_occurrences("cat", ["cat ", "cat", " ", "cat"]) == 3


def test_multibyte_character_split_across_chunks() -> None:
    word = "café"
    data = "café au lait café".encode("utf-8")
    split_at = data.index(b"\xc3") + 1
    chunks = [data[:split_at], data[split_at:]]
    assert count_occurrences(word, chunks) == 2


def test_invalid_bytes_never_match() -> None:
    assert count_occurrences("\ufffd", [b"\xff \xfe cat"]) == 0
    assert count_occurrences("cat", [b"\xff cat \xfecat"]) == 1


def test_reads_from_binary_and_text_files() -> None:
    assert count_occurrences("cat", io.BytesIO(b"cat\nsat\ncat\n")) == 2
    assert count_occurrences("cat", io.StringIO("cat\nsat\ncat")) == 2


def test_other_encodings() -> None:
    data = "naïve naïve".encode("latin-1")
    assert count_occurrences("naïve", [data], encoding="latin-1") == 2


def test_counting_is_repeatable() -> None:
    text = "the cat and the other cat and the third cat"
    first = count_occurrences("cat", [text])
    assert count_occurrences("cat", [text]) == first == 3


def test_read_failure_reports_partial_count() -> None:
    def body() -> Iterator[bytes]:
        yield b"cat cat ca"
        raise httpx.ReadError("connection reset")

    with pytest.raises(ScanError) as info:
        count_occurrences("cat", body())

    assert info.value.count == 2
    assert isinstance(info.value.cause, httpx.ReadError)
    assert isinstance(info.value.__cause__, httpx.ReadError)


def test_os_error_while_reading_is_a_scan_error() -> None:
    def body() -> Iterator[str]:
        yield "cat "
        raise OSError("disk went away")

    with pytest.raises(ScanError) as info:
        count_occurrences("cat", body())
    assert info.value.count == 1


def test_token_too_long_is_a_scan_error() -> None:
    chunks = ["cat ", "x" * 10, "y" * 10]
    with pytest.raises(ScanError) as info:
        count_occurrences("cat", chunks, max_token_size=16)
    assert info.value.count == 1


def test_long_text_with_short_tokens_stays_within_limit() -> None:
    chunks = ["cat dog " * 1000] * 10
    assert count_occurrences("cat", chunks, max_token_size=8) == 10000


def test_token_too_long_fails_however_it_is_chunked() -> None:
    text = "cat " + "x" * 10 + "y" * 10 + " cat"
    for split_points in [(), (4,), (14,), (24,), (25,), (4, 14), (14, 24), (10, 20, 26)]:
        bounds = [0, *split_points, len(text)]
        chunks = [text[a:b] for a, b in zip(bounds, bounds[1:])]
        with pytest.raises(ScanError) as info:
            count_occurrences("cat", chunks, max_token_size=16)
        assert info.value.count == 1, chunks


def test_token_at_the_limit_is_accepted() -> None:
    text = "cat " + "x" * 16 + " cat"
    assert count_occurrences("cat", [text], max_token_size=16) == 2
    assert count_occurrences("cat", [text[:10], text[10:]], max_token_size=16) == 2


def test_information_separators_are_not_whitespace() -> None:
    assert count_occurrences("cat", ["cat\x1ccat"]) == 0
    assert count_occurrences("cat\x1fcat", ["cat\x1fcat cat"]) == 1


def test_nbsp_and_next_line_separate_tokens() -> None:
    assert count_occurrences("cat", ["cat\xa0cat\x85cat cat"]) == 4
