"""
adjacentwm.selection.geometry - Primitivas geometricas.

Define el rectangulo inmutable que describe el marco de una ventana en el
momento de la seleccion, y las cuatro direcciones cardinales sobre las que
se buscan ventanas vecinas.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Direction(enum.Enum):
    """Cardinal directions for adjacent-window commands."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True, slots=True)
class Rect:
    """
    Rectangulo inmutable definido por posicion (x, y) y dimensiones.

    Todas las coordenadas estan en pixeles. El origen (0, 0) es la esquina
    superior-izquierda del monitor primario. Los bordes derecho e inferior
    son semi-abiertos: `right` es x + width y `bottom` es y + height.

    Atributos:
        x:      Coordenada horizontal de la esquina superior-izquierda.
        y:      Coordenada vertical de la esquina superior-izquierda.
        width:  Ancho en pixeles (>= 0).
        height: Alto en pixeles (>= 0).
    """

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Rect con dimensiones negativas: {self.width}x{self.height}")

    # ------------------------------------------------------------------
    # Propiedades derivadas
    # ------------------------------------------------------------------
    @property
    def left(self) -> int:
        return self.x

    @property
    def top(self) -> int:
        return self.y

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    # ------------------------------------------------------------------
    # Esquinas
    # ------------------------------------------------------------------
    @property
    def top_left(self) -> tuple[int, int]:
        return (self.left, self.top)

    @property
    def top_right(self) -> tuple[int, int]:
        return (self.right, self.top)

    @property
    def bottom_left(self) -> tuple[int, int]:
        return (self.left, self.bottom)

    @property
    def bottom_right(self) -> tuple[int, int]:
        return (self.right, self.bottom)

    def covers_point(self, px: int, py: int) -> bool:
        """
        True si el punto (px, py) cae dentro del rectangulo.

        A diferencia del resto de comparaciones, aqui ambos bordes son
        inclusivos: un punto sobre el borde derecho o inferior cuenta como
        cubierto.
        """
        return self.left <= px <= self.right and self.top <= py <= self.bottom

    # ------------------------------------------------------------------
    # Conversion a tupla Win32 (left, top, right, bottom)
    # ------------------------------------------------------------------
    def to_ltrb(self) -> tuple[int, int, int, int]:
        """Retorna (left, top, right, bottom) para compatibilidad Win32."""
        return (self.left, self.top, self.right, self.bottom)

    @classmethod
    def from_ltrb(cls, left: int, top: int, right: int, bottom: int) -> Rect:
        """Crea un Rect desde coordenadas (left, top, right, bottom)."""
        return cls(left, top, max(0, right - left), max(0, bottom - top))

    def __str__(self) -> str:
        return f"Rect({self.width}x{self.height}+{self.x}+{self.y})"
