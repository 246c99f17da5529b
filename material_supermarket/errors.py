"""Errores del dominio.

Todos derivan de ValueError: las rutas los capturan y los muestran con
flash(str(e), "danger") sin aplicar la operación.
"""


class InventoryError(ValueError):
    """Base de los errores de bookkeeping."""


class MaterialNotFound(InventoryError):
    def __init__(self, material_id):
        self.material_id = material_id
        super().__init__(f"Material no encontrado: {material_id}")


class InvalidBin(InventoryError):
    def __init__(self, bin_number):
        self.bin_number = bin_number
        super().__init__(f"BIN inválido: {bin_number}. Debe estar entre 1 y 4.")


class InvalidQuantity(InventoryError):
    def __init__(self, quantity):
        self.quantity = quantity
        super().__init__(f"Cantidad inválida: {quantity}. Debe ser un entero mayor a 0.")


class InsufficientStock(InventoryError):
    def __init__(self, material_id, bin_number, requested, available):
        self.material_id = material_id
        self.bin_number = bin_number
        self.requested = requested
        self.available = available
        super().__init__(
            f"Stock insuficiente en BIN {bin_number} de {material_id}. "
            f"Solicitado: {requested}, disponible: {available}."
        )


class CapacityExceeded(InventoryError):
    def __init__(self, material_id, bin_number, requested, current, capacity):
        self.material_id = material_id
        self.bin_number = bin_number
        self.requested = requested
        self.current = current
        self.capacity = capacity
        super().__init__(
            f"Capacidad del BIN {bin_number} de {material_id} excedida. "
            f"Máximo: {capacity}, actual: {current}, a llenar: {requested}."
        )


class InvalidAdgiStatus(InventoryError):
    def __init__(self, status):
        self.status = status
        super().__init__(f"Estado ADGI inválido: {status}")


class ImportParseError(InventoryError):
    """El Excel no tiene una hoja reconocible o no trae filas válidas."""
