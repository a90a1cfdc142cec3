"""Tests for split geometry."""

import pytest

from xplit.models import Monitor
from xplit.split import split, virtual_names

HDMI = Monitor(
    name="HDMI-1",
    width=1920,
    height=1080,
    physical_width=520,
    physical_height=290,
    x=0,
    y=0,
)
OFFSET = Monitor(
    name="DP-1",
    width=2561,
    height=1440,
    physical_width=597,
    physical_height=336,
    x=1920,
    y=120,
)


class TestSplit:
    def test_half(self):
        left, right = split(HDMI, 50)

        assert (left.width, left.physical_width, left.x) == (960, 260, 0)
        assert (right.width, right.physical_width, right.x) == (960, 260, 960)

    def test_names_and_sources(self):
        left, right = split(HDMI, 50)

        assert left.name == "HDMI-1-0"
        assert right.name == "HDMI-1-1"
        assert left.source == "HDMI-1"
        assert right.source is None

    def test_height_and_offsets_inherited(self):
        left, right = split(OFFSET, 30)

        for side in (left, right):
            assert side.height == 1440
            assert side.physical_height == 336
            assert side.y == 120
        assert left.x == 1920
        assert right.x == 1920 + left.width

    def test_remainder_goes_right(self):
        left, right = split(OFFSET, 50)

        assert left.width == 1280
        assert right.width == 1281
        assert left.physical_width == 597 * 1280 // 2561
        assert right.physical_width == 597 - left.physical_width

    @pytest.mark.parametrize("percent", [0, 1, 33, 50, 67, 99, 100])
    @pytest.mark.parametrize("monitor", [HDMI, OFFSET])
    def test_widths_add_up(self, monitor, percent):
        left, right = split(monitor, percent)

        assert left.width + right.width == monitor.width
        assert left.physical_width + right.physical_width == monitor.physical_width

    def test_zero_percent(self):
        left, right = split(HDMI, 0)

        assert left.width == 0
        assert left.physical_width == 0
        assert right.width == 1920
        assert right.x == 0

    def test_hundred_percent(self):
        left, right = split(HDMI, 100)

        assert right.width == 0
        assert right.physical_width == 0
        assert right.x == 1920

    def test_float_percent_truncated(self):
        assert split(HDMI, 74.9)[0].width == split(HDMI, 74)[0].width

    def test_geometry_token(self):
        left, right = split(HDMI, 25)

        assert left.geometry == "480/130x1080/290+0+0"
        assert right.geometry == "1440/390x1080/290+480+0"

    @pytest.mark.parametrize("percent", [-1, 101])
    def test_percent_out_of_range(self, percent):
        with pytest.raises(ValueError, match="0-100"):
            split(HDMI, percent)

    def test_zero_width_rejected(self):
        empty = Monitor("X", 0, 1080, 0, 0, 0, 0)
        with pytest.raises(ValueError, match="width"):
            split(empty, 50)


def test_virtual_names():
    assert virtual_names("eDP-1") == ("eDP-1-0", "eDP-1-1")
