class DuesError(Exception):
    """Clase base para todos los errores del motor de cuotas."""
    pass

class DueValidationError(DuesError):
    """
    Entrada inválida: año/mes fuera de rango, fecha de pago futura,
    método de pago desconocido, período anterior al ingreso del socio.
    Nunca se reintenta.
    """
    pass

class DueConflictError(DuesError):
    """Ya existe una cuota para (socio, año, mes)."""
    pass

class DueNotFoundError(DuesError):
    """La cuota o el socio no existen."""
    pass

class DueForbiddenError(DuesError):
    """Operación no permitida sobre la cuota (p. ej. eliminar una cuota pagada)."""
    pass

class DueAlreadyPaidError(DuesError):
    """La cuota ya estaba marcada como pagada."""
    pass
