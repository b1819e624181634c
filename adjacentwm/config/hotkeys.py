"""
adjacentwm.config.hotkeys - Registro de hotkeys direccionales.

Vincula los cuatro valores de configuracion de teclas a las direcciones:

    left-key   -> Direction.LEFT
    right-key  -> Direction.RIGHT
    up-key     -> Direction.UP
    down-key   -> Direction.DOWN

Cada valor puede contener varias combinaciones separadas por "::".
Un valor vacio o "::" significa que la direccion no tiene hotkey.
Las combinaciones invalidas se registran en el log y se omiten.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from adjacentwm.config.settings import DOWN_KEY, LEFT_KEY, RIGHT_KEY, UP_KEY, Settings
from adjacentwm.core.combo_parser import ComboParseError, parse_combo, split_bindings
from adjacentwm.selection.geometry import Direction

if TYPE_CHECKING:
    from adjacentwm.core.keybinds import HotkeyManager

log = logging.getLogger(__name__)


# Mapeo de clave de configuracion -> direccion
DIRECTION_KEYS: dict[str, Direction] = {
    LEFT_KEY: Direction.LEFT,
    RIGHT_KEY: Direction.RIGHT,
    UP_KEY: Direction.UP,
    DOWN_KEY: Direction.DOWN,
}


def get_hotkey_sequences(settings: Settings, key: str) -> list[str]:
    """
    Retorna las combinaciones configuradas para *key*.

    Lista vacia si el valor no existe, esta vacio o es "::".
    """
    return split_bindings(settings.get_value(key))


def register_direction_hotkeys(
    hk_manager: HotkeyManager,
    settings: Settings,
    on_direction: Callable[[Direction], None],
) -> list[int]:
    """
    Registra los hotkeys de las cuatro direcciones.

    Args:
        hk_manager:   Gestor de hotkeys donde registrar.
        settings:     Configuracion con los valores "*-key".
        on_direction: Funcion llamada con la direccion al pulsar el hotkey.

    Returns:
        IDs de los hotkeys registrados exitosamente.
    """
    registered: list[int] = []

    for key, direction in DIRECTION_KEYS.items():
        sequences = get_hotkey_sequences(settings, key)
        if not sequences:
            log.debug("Hotkey %s: sin combinacion, omitido", key)
            continue

        for combo in sequences:
            try:
                modifiers, vk = parse_combo(combo)
            except ComboParseError as e:
                log.error("Hotkey %s: combinacion invalida %r (%s)", key, combo, e)
                continue

            hotkey_id = hk_manager.register(
                modifiers=modifiers,
                vk=vk,
                callback=_bind_direction(on_direction, direction),
                description=f"adjacent-{direction.value} ({combo})",
            )
            if hotkey_id is not None:
                registered.append(hotkey_id)

    log.info("Hotkeys direccionales registrados: %d", len(registered))
    return registered


def _bind_direction(
    on_direction: Callable[[Direction], None],
    direction: Direction,
) -> Callable[[], None]:
    def _callback() -> None:
        on_direction(direction)
    return _callback
