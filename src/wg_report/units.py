# src/wg_report/units.py
from __future__ import annotations


UNIT = 1024
SUFFIXES = ("KiB", "MiB", "GiB", "TiB", "PiB", "EiB")


def bytes_to_si(n: int) -> str:
    """
    Formate un compteur d'octets en unités binaires, ex: 1536 -> "1.5 KiB".

    En dessous de 1024 : entier + " B". Au-dessus : une décimale, avec la
    plus grande unité qui garde la mantisse dans [1, 1024). Le signe est
    conservé pour les valeurs négatives.
    """
    sign = "-" if n < 0 else ""
    magnitude = abs(n)

    if magnitude < UNIT:
        return f"{sign}{magnitude} B"

    div, exp = UNIT, 0
    while magnitude // div >= UNIT and exp < len(SUFFIXES) - 1:
        div *= UNIT
        exp += 1

    value = magnitude / div
    # 1048575 -> "1024.0 KiB" une fois arrondi : on passe à l'unité suivante
    if round(value, 1) >= UNIT and exp < len(SUFFIXES) - 1:
        div *= UNIT
        exp += 1
        value = magnitude / div

    return f"{sign}{value:.1f} {SUFFIXES[exp]}"
