import secrets
import string
from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar, Optional

ACTION_TAKE = "take"
ACTION_FILL = "fill"

ADGI_PENDING = "pending"
ADGI_DONE = "done"
ADGI_STATUSES = (ADGI_PENDING, ADGI_DONE)

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_history_id(action, when=None):
    """ID tipo "take-1718000000000-k3j9x0abc"."""
    when = when or datetime.now()
    millis = int(when.timestamp() * 1000)
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{action}-{millis}-{suffix}"


@dataclass
class AdgiRecord:
    """Único estado mutable de un movimiento: la confirmación ADGI."""

    status: str = ADGI_PENDING
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None

    @property
    def is_done(self):
        return self.status == ADGI_DONE


# ============================================================
# 🧾 MOVIMIENTOS DEL LEDGER
# ============================================================
@dataclass(frozen=True)
class HistoryEntry:
    id: str
    material_id: str
    material_description: str
    bin_number: int
    quantity: int
    timestamp: datetime
    user: str

    action: ClassVar[str] = ""

    @property
    def is_take(self):
        return self.action == ACTION_TAKE

    def to_row(self):
        return {
            "id": self.id,
            "material_id": self.material_id,
            "material_description": self.material_description,
            "action": self.action,
            "bin_number": self.bin_number,
            "quantity": self.quantity,
            "timestamp": self.timestamp,
            "user": self.user,
        }


@dataclass(frozen=True)
class TakeEntry(HistoryEntry):
    adgi: AdgiRecord = field(default_factory=AdgiRecord)

    action: ClassVar[str] = ACTION_TAKE

    def to_row(self):
        row = super().to_row()
        row.update(
            adgi_status=self.adgi.status,
            adgi_updated_at=self.adgi.updated_at,
            adgi_updated_by=self.adgi.updated_by,
        )
        return row


@dataclass(frozen=True)
class FillEntry(HistoryEntry):
    # Los llenados nunca llevan ADGI
    action: ClassVar[str] = ACTION_FILL
