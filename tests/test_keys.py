import pytest

from keyshow.keys import (
    KEY_A,
    KEY_ENTER,
    KEY_SPACE,
    KeyEvent,
    format_key_name,
    is_modifier_key,
    key_name,
    make_key_event,
)

MODIFIER_CODES = [42, 54, 29, 97, 56, 100, 125, 126]


def test_letter_label():
    assert format_key_name(KEY_A) == "A"


def test_special_labels():
    assert format_key_name(KEY_SPACE) == "SPACE"
    assert format_key_name(KEY_ENTER) == "ENTER"
    assert format_key_name(14) == "BKSP"


def test_both_shift_keys_share_label():
    assert format_key_name(42) == format_key_name(54) == "SHIFT"


def test_left_and_right_modifiers_share_labels():
    for left, right in [(29, 97), (56, 100), (125, 126)]:
        assert format_key_name(left) == format_key_name(right)


@pytest.mark.parametrize("code", MODIFIER_CODES)
def test_modifiers_detected(code):
    assert is_modifier_key(code) is True


@pytest.mark.parametrize("code", [KEY_A, KEY_ENTER, KEY_SPACE, 58, 9999])
def test_non_modifiers(code):
    assert is_modifier_key(code) is False


def test_unlisted_key_falls_back_to_kernel_name():
    assert format_key_name(58) == key_name(58)
    assert format_key_name(58).startswith("KEY_")


def test_unknown_code():
    assert key_name(9999) == "unknown key: 9999"
    assert format_key_name(9999) == key_name(9999)


def test_key_name_known():
    assert key_name(KEY_A) == "KEY_A"


def test_make_key_event_pressed():
    event = make_key_event(KEY_A, 1)
    assert event == KeyEvent(key="A", pressed=True, is_modifier=False)


@pytest.mark.parametrize("value", [0, 2])
def test_make_key_event_not_pressed(value):
    assert make_key_event(KEY_A, value).pressed is False


def test_make_key_event_modifier():
    event = make_key_event(29, 1)
    assert event.is_modifier is True
    assert event.key == "CTRL"