from pathlib import Path

import pytest

from bfc.errors import CompressionError, OutputParseError
from bfc.parser import parse_xz_output


def test_sample_line():
    r = parse_xz_output("/tmp/big-grid.xml: 453.4 KiB / 2,585.8 KiB = 0.175\n")

    assert r.bytes_compressed == 464281
    assert r.bytes_uncompressed == 2647859
    assert r.compression_ratio == pytest.approx(0.175)
    assert r.path_uncompressed == Path("/tmp/big-grid.xml")
    assert r.path_compressed == Path("/tmp/big-grid.xml.xz")


def test_trailing_speed_and_time_are_ignored():
    r = parse_xz_output("/data/a.bin: 1,024.0 KiB / 4,096.0 KiB = 0.250, 12 MiB/s, 0:02\n")

    assert r.bytes_compressed == 1024 * 1024
    assert r.bytes_uncompressed == 4096 * 1024
    assert r.compression_ratio == pytest.approx(0.25)


def test_other_units_are_converted():
    r = parse_xz_output("/data/huge.img: 1.5 GiB / 12.0 GiB = 0.125")

    assert r.bytes_compressed == int(1.5 * 1024**3)
    assert r.bytes_uncompressed == 12 * 1024**3


def test_path_with_spaces_and_colon():
    r = parse_xz_output("/data/my dump: part 2.sql: 10.0 MiB / 100.0 MiB = 0.100")

    assert r.path_uncompressed == Path("/data/my dump: part 2.sql")
    assert r.path_compressed == Path("/data/my dump: part 2.sql.xz")


def test_last_summary_line_wins():
    raw = "xz: some notice\n/x/a: 1.0 KiB / 2.0 KiB = 0.500\n/x/b: 3.0 KiB / 4.0 KiB = 0.750\n"
    r = parse_xz_output(raw)

    assert r.path_uncompressed == Path("/x/b")


def test_expansion_is_not_an_error():
    r = parse_xz_output("/x/random.bin: 1,100.0 KiB / 1,024.0 KiB = 1.074")

    assert r.bytes_compressed > r.bytes_uncompressed
    assert r.saved_bytes < 0


def test_custom_suffix():
    r = parse_xz_output("/x/a: 1.0 KiB / 2.0 KiB = 0.500", suffix=".lzma")

    assert r.path_compressed == Path("/x/a.lzma")


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "xz: /x/a: No space left on device\n",
        "/x/a: 1.0 KB / 2.0 KB = 0.500",  # decimal units are not what xz prints
        "/x/a: 1.0 KiB / 2.0 KiB = ---",
    ],
)
def test_unexpected_output_fails_loudly(raw):
    with pytest.raises(OutputParseError) as exc:
        parse_xz_output(raw)

    assert exc.value.raw == raw
    assert isinstance(exc.value, CompressionError)


def test_leading_space_belongs_to_the_name():
    r = parse_xz_output(" lead.bin: 512.0 KiB / 2,048.0 KiB = 0.250\n")

    assert r.path_uncompressed == Path(" lead.bin")
    assert r.path_compressed == Path(" lead.bin.xz")
