"""
adjacentwm.core.monitor - Deteccion de monitores.

Usa win32api de pywin32 para enumerar los monitores conectados y para
averiguar en que monitor esta cada ventana.  El indice de un monitor en la
lista ordenada de get_monitors() es el monitor_id de los WindowRef.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import win32api
import win32con

from adjacentwm.selection.geometry import Rect

log = logging.getLogger(__name__)


# ============================================================================
# Monitor
# ============================================================================
@dataclass(frozen=True, slots=True)
class Monitor:
    """
    Representa un monitor fisico conectado al sistema.

    Atributos:
        name:       Nombre del dispositivo (ej. r'\\\\.\\DISPLAY1').
        full_rect:  Area total del monitor (resolucion completa).
        work_rect:  Area de trabajo (descontando taskbar y barras).
        is_primary: True si es el monitor principal.
    """

    name: str
    full_rect: Rect
    work_rect: Rect
    is_primary: bool = False


# ============================================================================
# Funciones de deteccion
# ============================================================================

def get_monitors() -> list[Monitor]:
    """
    Enumera todos los monitores conectados al sistema.

    Returns:
        Lista de Monitor ordenada: el primario primero, luego por nombre.
    """
    monitors: list[Monitor] = []

    for hmonitor, _hdc, _rect in win32api.EnumDisplayMonitors(None, None):
        try:
            info = win32api.GetMonitorInfo(hmonitor)
        except win32api.error:
            log.warning("No se pudo obtener info del monitor %s", hmonitor)
            continue

        monitor = Monitor(
            name=info["Device"],
            full_rect=Rect.from_ltrb(*info["Monitor"]),
            work_rect=Rect.from_ltrb(*info["Work"]),
            is_primary=bool(info["Flags"] & win32con.MONITORINFOF_PRIMARY),
        )
        monitors.append(monitor)

    # Ordenar: primario primero, luego por nombre
    monitors.sort(key=lambda m: (not m.is_primary, m.name))
    log.debug("Monitores detectados: %d", len(monitors))
    return monitors


def get_window_monitor_name(hwnd: int) -> str:
    """
    Nombre del dispositivo del monitor que contiene la mayor parte de la
    ventana (o el mas cercano si esta fuera de pantalla).
    """
    try:
        hmonitor = win32api.MonitorFromWindow(hwnd, win32con.MONITOR_DEFAULTTONEAREST)
        return win32api.GetMonitorInfo(hmonitor)["Device"]
    except win32api.error:
        log.debug("Monitor desconocido para %#010x", hwnd)
        return ""


def monitor_index(monitors: list[Monitor], name: str) -> int:
    """Indice del monitor *name* en *monitors*, 0 si no se encuentra."""
    for index, monitor in enumerate(monitors):
        if monitor.name == name:
            return index
    return 0
