import pytest

from duckpond.textures import gl_format_for_channels


def test_known_channel_counts():
    assert gl_format_for_channels(1) == 0x1903
    assert gl_format_for_channels(3) == 0x1907
    assert gl_format_for_channels(4) == 0x1908


@pytest.mark.parametrize("channels", [0, 2, 5])
def test_unknown_channel_counts_fall_back_to_rgb(channels):
    assert gl_format_for_channels(channels) == gl_format_for_channels(3)


def test_formats_are_distinct():
    formats = {gl_format_for_channels(c) for c in (1, 3, 4)}
    assert len(formats) == 3