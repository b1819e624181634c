from adjacentwm.config.hotkeys import get_hotkey_sequences, register_direction_hotkeys
from adjacentwm.config.settings import DOWN_KEY, LEFT_KEY, RIGHT_KEY, UP_KEY, Settings
from adjacentwm.core.combo_parser import MOD_ALT, MOD_CONTROL
from adjacentwm.selection.geometry import Direction


def test_defaults_register_all_four_directions(hk_manager):
    pressed = []
    ids = register_direction_hotkeys(hk_manager, Settings(), pressed.append)

    assert len(ids) == 4
    combos = sorted((mods, vk) for mods, vk, _cb, _desc in hk_manager.hotkeys.values())
    assert combos == [(MOD_CONTROL | MOD_ALT, vk) for vk in (0x25, 0x26, 0x27, 0x28)]

    hk_manager.press(0x25)
    hk_manager.press(0x28)
    assert pressed == [Direction.LEFT, Direction.DOWN]


def test_unbound_and_invalid_values_are_skipped(hk_manager):
    settings = Settings()
    settings.set_value(LEFT_KEY, "::")
    settings.set_value(RIGHT_KEY, "")
    settings.set_value(UP_KEY, "ctrl+nonsense")

    ids = register_direction_hotkeys(hk_manager, settings, lambda d: None)

    assert len(ids) == 1
    (_mods, vk, _cb, desc), = hk_manager.hotkeys.values()
    assert vk == 0x28
    assert desc == "adjacent-down (ctrl+alt+down)"


def test_multiple_bindings_for_one_direction(hk_manager):
    settings = Settings()
    settings.set_value(LEFT_KEY, "<Control><Alt>Left::<Super>h")
    pressed = []

    register_direction_hotkeys(hk_manager, settings, pressed.append)

    assert len(hk_manager.hotkeys) == 5
    hk_manager.press(0x48)
    assert pressed == [Direction.LEFT]


def test_rejected_registration_is_not_reported(hk_manager):
    real_register = hk_manager.register

    def refuse_down(modifiers, vk, callback, description=""):
        if vk == 0x28:
            return None
        return real_register(modifiers, vk, callback, description)

    hk_manager.register = refuse_down
    ids = register_direction_hotkeys(hk_manager, Settings(), lambda d: None)
    assert len(ids) == 3


def test_get_hotkey_sequences():
    settings = Settings()
    settings.set_value(DOWN_KEY, "alt+j::alt+down")
    assert get_hotkey_sequences(settings, DOWN_KEY) == ["alt+j", "alt+down"]
    assert get_hotkey_sequences(settings, "missing-key") == []
