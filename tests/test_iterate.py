from __future__ import annotations

import io
import tarfile

import pytest

from layertar.common.errors import TarVisitError
from layertar.core.decoder import TarDecoder
from layertar.core.iterate import VisitResult, iterate_tar


SAMPLE = [
    ("dir", "etc"),
    ("file", "etc/hostname", b"layer\n"),
    ("symlink", "etc/localtime", "/usr/share/zoneinfo/UTC"),
    ("file", "etc/os-release", b"ID=test\n"),
]


def test_iterate_visits_every_entry_in_order(make_tar):
    seen = []

    def visitor(entry):
        seen.append((entry.sequence, entry.name))
        return VisitResult.CONTINUE

    iterate_tar(make_tar(SAMPLE), visitor)

    assert seen == [
        (0, "etc"),
        (1, "etc/hostname"),
        (2, "etc/localtime"),
        (3, "etc/os-release"),
    ]


def test_iterate_none_result_means_continue(make_tar):
    seen = []
    iterate_tar(make_tar(SAMPLE), lambda entry: seen.append(entry.name))
    assert len(seen) == len(SAMPLE)


def test_iterate_exposes_entry_content(make_tar):
    contents = {}

    def visitor(entry):
        contents[entry.name] = entry.content.read()
        return VisitResult.CONTINUE

    iterate_tar(make_tar(SAMPLE), visitor)

    assert contents["etc/hostname"] == b"layer\n"
    assert contents["etc/os-release"] == b"ID=test\n"
    assert contents["etc"] == b""
    assert contents["etc/localtime"] == b""


def test_iterate_partially_read_content_is_skipped(make_tar):
    stream = make_tar([
        ("file", "big", b"x" * 5000),
        ("file", "small", b"tail"),
    ])
    contents = {}

    def visitor(entry):
        contents[entry.name] = entry.content.read(3)
        return VisitResult.CONTINUE

    iterate_tar(stream, visitor)

    assert contents == {"big": b"xxx", "small": b"tai"}


def test_iterate_stop_halts_without_error(make_tar):
    seen = []

    def visitor(entry):
        seen.append(entry.name)
        if entry.name == "etc/hostname":
            return VisitResult.STOP
        return VisitResult.CONTINUE

    iterate_tar(make_tar(SAMPLE), visitor)

    assert seen == ["etc", "etc/hostname"]


def test_iterate_failure_wraps_entry_name(make_tar):
    seen = []
    boom = ValueError("boom")

    def visitor(entry):
        seen.append(entry.name)
        if entry.name == "etc/hostname":
            return VisitResult.fail(boom)
        return VisitResult.CONTINUE

    with pytest.raises(TarVisitError) as excinfo:
        iterate_tar(make_tar(SAMPLE), visitor)

    assert excinfo.value.entry_name == "etc/hostname"
    assert excinfo.value.cause is boom
    assert excinfo.value.__cause__ is boom
    assert "etc/hostname" in str(excinfo.value)
    assert seen == ["etc", "etc/hostname"]


def test_iterate_raised_visitor_error_is_wrapped(make_tar):
    def visitor(entry):
        raise RuntimeError("visitor exploded")

    with pytest.raises(TarVisitError, match="visitor exploded") as excinfo:
        iterate_tar(make_tar(SAMPLE), visitor)

    assert excinfo.value.entry_name == "etc"
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_iterate_decode_error_is_not_wrapped():
    garbage = io.BytesIO(b"definitely not a tar header" * 40)

    with pytest.raises(tarfile.ReadError):
        iterate_tar(garbage, lambda entry: VisitResult.CONTINUE)


def test_iterate_empty_archive_visits_nothing(make_tar):
    seen = []
    iterate_tar(make_tar([]), lambda entry: seen.append(entry))
    assert seen == []


def test_iterate_reads_compressed_layers(make_tar):
    seen = []
    iterate_tar(make_tar(SAMPLE, compression="gz"), lambda entry: seen.append(entry.name))
    assert seen == [spec[1] for spec in SAMPLE]


def test_iterate_does_not_close_stream(make_tar):
    stream = make_tar(SAMPLE)
    iterate_tar(stream, lambda entry: VisitResult.STOP)
    assert not stream.closed


def test_decoder_sequence_starts_at_zero(make_tar):
    decoder = TarDecoder(make_tar(SAMPLE))
    assert decoder.sequence == -1

    first = decoder.next_entry()
    second = decoder.next_entry()

    assert (first.sequence, first.name) == (0, "etc")
    assert (second.sequence, second.name) == (1, "etc/hostname")


def test_decoder_returns_none_after_end(make_tar):
    decoder = TarDecoder(make_tar([("file", "only", b"1")]))
    entries = list(decoder)

    assert [entry.name for entry in entries] == ["only"]
    assert decoder.next_entry() is None
    assert decoder.next_entry() is None


def test_iterate_zero_byte_stream_is_empty_archive():
    seen = []
    iterate_tar(io.BytesIO(b""), lambda entry: seen.append(entry))
    assert seen == []


def test_decoder_zero_byte_stream_ends_immediately():
    decoder = TarDecoder(io.BytesIO(b""))
    assert decoder.next_entry() is None
    assert decoder.next_entry() is None


def test_decoder_does_not_retain_headers(make_tar):
    stream = make_tar([("file", f"f{i}", b"x") for i in range(500)])
    decoder = TarDecoder(stream)

    count = 0
    for entry in decoder:
        count += 1
        assert decoder._tar.members == []

    assert count == 500
    assert decoder._tar.members == []
