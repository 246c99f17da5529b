"""Vistas derivadas del dashboard y del historial. Funciones puras, sin estado."""
from collections import Counter
from datetime import date

from ..models.material import BIN_NUMBERS, round_percent
from ..models.history import ACTION_TAKE, ACTION_FILL

SORT_NEWEST = "newest"
SORT_OLDEST = "oldest"
ACTION_ALL = "all"


def _today(today=None):
    return today or date.today()


# =====================================================================================
#                                   MATERIALES
# =====================================================================================

def material_stats(materials):
    total_materials = len(materials)
    available_materials = sum(1 for m in materials if m.is_available)
    total_stock = sum(m.total_stock for m in materials)
    total_capacity = sum(m.total_capacity for m in materials)

    return {
        "total_materials": total_materials,
        "available_materials": available_materials,
        "empty_materials": total_materials - available_materials,
        "total_stock": total_stock,
        "total_capacity": total_capacity,
        "utilization": round_percent(total_stock, total_capacity),
    }


def bin_stats(materials):
    """Resumen por BIN 1..4, cada uno independiente."""
    resumen = []
    for n in BIN_NUMBERS:
        stock = sum(m.get_bin(n) for m in materials)
        capacity = sum(m.qty_per_bin for m in materials)
        resumen.append({
            "bin_number": n,
            "stock": stock,
            "capacity": capacity,
            "utilization": round_percent(stock, capacity),
            "active_materials": sum(1 for m in materials if m.get_bin(n) > 0),
        })
    return resumen


def critical_materials(materials, ratio=0.2):
    """Materiales con stock total por debajo del 20% de su propia capacidad."""
    return [m for m in materials if m.total_stock < m.total_capacity * ratio]


def utilization_level(percentage):
    if percentage >= 80:
        return "critical"
    if percentage >= 60:
        return "high"
    if percentage >= 40:
        return "medium"
    return "low"


def filter_materials(materials, search=""):
    term = (search or "").strip().lower()
    if not term:
        return list(materials)
    return [
        m for m in materials
        if term in m.id.lower() or term in m.description.lower()
    ]


# =====================================================================================
#                                   HISTORIAL
# =====================================================================================

def history_stats(history, today=None):
    today = _today(today)
    todays = [h for h in history if h.timestamp.date() == today]

    today_taken = sum(h.quantity for h in todays if h.action == ACTION_TAKE)
    today_filled = sum(h.quantity for h in todays if h.action == ACTION_FILL)

    return {
        "total_entries": len(history),
        "total_taken": sum(h.quantity for h in history if h.action == ACTION_TAKE),
        "total_filled": sum(h.quantity for h in history if h.action == ACTION_FILL),
        "today_entries": len(todays),
        "today_taken": today_taken,
        "today_filled": today_filled,
        "net_change": today_filled - today_taken,
    }


def most_active_materials(materials, history, limit=5):
    """[(material, movimientos)] ordenado de mayor a menor actividad."""
    counts = Counter(h.material_id for h in history)
    ranked = [(m, counts[m.id]) for m in materials if counts[m.id] > 0]
    # sorted es estable: empates conservan el orden del catálogo
    ranked = sorted(ranked, key=lambda pair: pair[1], reverse=True)
    return ranked[:limit]


def filter_history(history, search="", action=ACTION_ALL, sort=SORT_NEWEST):
    term = (search or "").strip().lower()

    def matches(entry):
        if term and not (
            term in entry.material_id.lower()
            or term in entry.material_description.lower()
            or term in entry.user.lower()
        ):
            return False
        return action in (None, "", ACTION_ALL) or entry.action == action

    return sorted(
        (e for e in history if matches(e)),
        key=lambda e: e.timestamp,
        reverse=(sort != SORT_OLDEST),
    )
