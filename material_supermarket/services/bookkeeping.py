import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..catalog import seed_materials
from ..errors import (
    MaterialNotFound,
    InvalidBin,
    InvalidQuantity,
    InsufficientStock,
    CapacityExceeded,
    InvalidAdgiStatus,
)
from ..models.material import BIN_NUMBERS
from ..models.history import (
    ACTION_TAKE,
    ACTION_FILL,
    ADGI_STATUSES,
    AdgiRecord,
    HistoryEntry,
    TakeEntry,
    FillEntry,
    generate_history_id,
)

logger = logging.getLogger(__name__)

SYSTEM_USER = "System"


# =====================================================================================
#                                       LEDGER
# =====================================================================================

class Ledger:
    """Historial append-only. Se recorre del más reciente al más antiguo."""

    def __init__(self):
        self._entries = []

    def append(self, entry: HistoryEntry):
        self._entries.append(entry)

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return reversed(self._entries)

    def entries(self):
        return list(self)

    def take_entries(self, material_id=None):
        return [
            e for e in self
            if e.is_take and (material_id is None or e.material_id == material_id)
        ]


@dataclass
class BookkeepingResult:
    entry: HistoryEntry
    synced: bool = False
    sync_error: Optional[Exception] = None

    @property
    def sync_failed(self):
        return self.sync_error is not None


# =====================================================================================
#                                   STORE DE MATERIALES
# =====================================================================================

class MaterialStore:
    """
    Estado completo de la app: lista de materiales + ledger.

    - take/fill validan primero y solo después mutan (nunca hay mutación parcial)
    - la sincronización con Excel no forma parte de la operación: si falla se
      informa, pero el movimiento ya quedó aplicado
    """

    def __init__(self, materials=None, auto_sync=True, sync_hook=None, clock=datetime.now):
        self.ledger = Ledger()
        self.auto_sync = auto_sync
        self.sync_hook = sync_hook
        self.clock = clock
        self.last_sync_at = None
        self._set_materials(seed_materials() if materials is None else materials)

    def _set_materials(self, materials):
        self.materials = list(materials)
        self._index = {m.id: m for m in self.materials}

    @property
    def history(self):
        return self.ledger.entries()

    def find_material(self, material_id):
        material = self._index.get(material_id)
        if material is None:
            raise MaterialNotFound(material_id)
        return material

    # ---------------- Validaciones ----------------

    @staticmethod
    def _check_bin(bin_number):
        if isinstance(bin_number, bool) or not isinstance(bin_number, int) or bin_number not in BIN_NUMBERS:
            raise InvalidBin(bin_number)

    @staticmethod
    def _check_quantity(quantity):
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidQuantity(quantity)

    def _validate(self, material_id, bin_number, quantity):
        material = self.find_material(material_id)
        self._check_bin(bin_number)
        self._check_quantity(quantity)
        return material

    # ---------------- Operaciones ----------------

    def take_material(self, material_id, bin_number, quantity, user=SYSTEM_USER):
        material = self._validate(material_id, bin_number, quantity)
        current = material.get_bin(bin_number)

        if quantity > current:
            raise InsufficientStock(material_id, bin_number, quantity, current)

        # Piso en 0 aunque la validación ya lo impide
        material.set_bin(bin_number, max(0, current - quantity))

        now = self.clock()
        entry = TakeEntry(
            id=generate_history_id(ACTION_TAKE, now),
            material_id=material.id,
            material_description=material.description,
            bin_number=bin_number,
            quantity=quantity,
            timestamp=now,
            user=user,
            adgi=AdgiRecord(updated_at=now, updated_by=SYSTEM_USER),
        )
        self.ledger.append(entry)

        logger.info(
            "TAKE %s BIN %s: %s -> %s (%s por %s)",
            material.id, bin_number, current, material.get_bin(bin_number), quantity, user,
        )
        return self._committed(entry)

    def fill_material(self, material_id, bin_number, quantity, user=SYSTEM_USER):
        material = self._validate(material_id, bin_number, quantity)
        current = material.get_bin(bin_number)

        if current + quantity > material.qty_per_bin:
            raise CapacityExceeded(material_id, bin_number, quantity, current, material.qty_per_bin)

        material.set_bin(bin_number, current + quantity)

        now = self.clock()
        entry = FillEntry(
            id=generate_history_id(ACTION_FILL, now),
            material_id=material.id,
            material_description=material.description,
            bin_number=bin_number,
            quantity=quantity,
            timestamp=now,
            user=user,
        )
        self.ledger.append(entry)

        logger.info(
            "FILL %s BIN %s: %s -> %s (%s por %s)",
            material.id, bin_number, current, material.get_bin(bin_number), quantity, user,
        )
        return self._committed(entry)

    def set_adgi_status(self, material_id, status, user=SYSTEM_USER):
        """Actualiza en bloque todos los retiros del material. Idempotente."""
        if status not in ADGI_STATUSES:
            raise InvalidAdgiStatus(status)

        entries = self.ledger.take_entries(material_id)
        if not entries:
            raise MaterialNotFound(material_id)

        now = self.clock()
        for entry in entries:
            entry.adgi.status = status
            entry.adgi.updated_at = now
            entry.adgi.updated_by = user

        logger.info("ADGI %s -> %s (%s movimientos, por %s)", material_id, status, len(entries), user)
        return entries

    def replace_materials(self, materials):
        """Reemplazo total del stock (importación). El historial se conserva."""
        self._set_materials(materials)
        logger.info("Materiales reemplazados: %s", len(self.materials))
        return self._notify_change()

    def set_auto_sync(self, enabled):
        self.auto_sync = bool(enabled)
        logger.info("Auto-sync %s", "activado" if self.auto_sync else "desactivado")

    # ---------------- Sincronización ----------------

    def _committed(self, entry):
        synced, error = self._notify_change()
        return BookkeepingResult(entry=entry, synced=synced, sync_error=error)

    def _notify_change(self):
        """Devuelve (sincronizado, error). Nunca deshace el cambio."""
        if not self.auto_sync or self.sync_hook is None:
            return False, None

        try:
            self.sync_hook(self)
        except Exception as e:
            logger.exception("Falló la sincronización automática con Excel")
            return False, e

        self.last_sync_at = self.clock()
        return True, None
