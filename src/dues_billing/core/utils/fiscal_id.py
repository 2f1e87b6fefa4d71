"""Normalización del RUT (identificador fiscal chileno)."""
import re

_STRIP_RX = re.compile(r"[\s.\-]")


def normalize_fiscal_id(raw: str | None) -> str:
    """
    Deja el RUT en forma canónica ``<cuerpo>-<dv>``, sin puntos ni espacios
    y con el dígito verificador en mayúscula.

    >>> normalize_fiscal_id(" 12.345.678-k ")
    '12345678-K'

    Devuelve cadena vacía si no hay nada que normalizar.
    """
    clean = _STRIP_RX.sub("", raw or "").upper()
    if len(clean) < 2:
        return clean
    return f"{clean[:-1]}-{clean[-1]}"
