import math
from dataclasses import dataclass, asdict

BIN_NUMBERS = (1, 2, 3, 4)


def round_percent(part, whole):
    """Porcentaje redondeado hacia arriba en .5 (0 si no hay capacidad)."""
    if not whole:
        return 0
    return int(math.floor(part / whole * 100 + 0.5))


# ============================================================
# 📦 MATERIAL CON 4 BINS
# ============================================================
@dataclass
class Material:
    id: str
    description: str
    qty_per_bin: int
    bin1: int = 0
    bin2: int = 0
    bin3: int = 0
    bin4: int = 0

    def get_bin(self, bin_number):
        return getattr(self, f"bin{bin_number}")

    def set_bin(self, bin_number, value):
        setattr(self, f"bin{bin_number}", value)

    @property
    def bins(self):
        return [self.get_bin(n) for n in BIN_NUMBERS]

    @property
    def total_stock(self):
        return sum(self.bins)

    @property
    def total_capacity(self):
        return self.qty_per_bin * len(BIN_NUMBERS)

    @property
    def is_available(self):
        """Al menos una unidad en algún bin."""
        return self.total_stock > 0

    @property
    def utilization(self):
        return round_percent(self.total_stock, self.total_capacity)

    @property
    def status(self):
        return "Available" if self.is_available else "Empty"

    def bin_utilization(self, bin_number):
        return round_percent(self.get_bin(bin_number), self.qty_per_bin)

    def bin_status(self, bin_number):
        """Clasificación del bin según su llenado."""
        qty = self.get_bin(bin_number)
        if qty == 0:
            return "empty"

        pct = self.bin_utilization(bin_number)
        if pct < 30:
            return "low"
        elif pct >= 90:
            return "full"
        else:
            return "ok"

    def to_dict(self):
        return asdict(self)

    def __repr__(self):
        return f"<Material {self.id} {self.bins}/{self.qty_per_bin}>"
