import pytest

from smoserve.errors import EncodingError
from smoserve.game_mode import GameMode


def test_none_is_minus_one():
    assert GameMode.NONE.to_i8() == -1
    assert GameMode.from_i8(-1) is GameMode.NONE


@pytest.mark.parametrize("nibble", range(15))
def test_to_i8_matches_nibble_for_real_modes(nibble):
    assert GameMode.from_u8(nibble).to_i8() == nibble


@pytest.mark.parametrize("mode", list(GameMode))
def test_i8_round_trip(mode):
    assert GameMode.from_i8(mode.to_i8()) is mode


@pytest.mark.parametrize("mode", list(GameMode))
def test_u8_round_trip(mode):
    assert GameMode.from_u8(mode.value) is mode


def test_out_of_range_is_none():
    assert GameMode.from_u8(200) is GameMode.NONE


@pytest.mark.parametrize(
    "text, mode",
    [
        ("-1", GameMode.NONE),
        ("None", GameMode.NONE),
        ("0", GameMode.LEGACY),
        ("Legacy", GameMode.LEGACY),
        ("1", GameMode.HIDE_AND_SEEK),
        ("HideAndSeek", GameMode.HIDE_AND_SEEK),
        ("Sardines", GameMode.SARDINES),
        ("FreezeTag", GameMode.FREEZE_TAG),
        ("14", GameMode.RESERVED),
    ],
)
def test_parse(text, mode):
    assert GameMode.parse(text) is mode


@pytest.mark.parametrize("text", ["15", "hideandseek", "", "Unknown04", "-2"])
def test_parse_rejects(text):
    with pytest.raises(EncodingError):
        GameMode.parse(text)


@pytest.mark.parametrize("mode", list(GameMode))
def test_str_parses_back_for_named_modes(mode):
    if mode.value < 4 or mode is GameMode.NONE:
        assert GameMode.parse(str(mode)) is mode
    else:
        assert GameMode.parse(str(mode.value)) is mode


def test_display_names():
    assert str(GameMode.from_u8(1)) == "HideAndSeek"
    assert str(GameMode.from_i8(-1)) == "None"
    assert str(GameMode.from_u8(14)) == "Reserved"