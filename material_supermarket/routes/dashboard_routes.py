from flask import Blueprint, render_template, current_app
from flask_login import login_required

from ..services import get_store
from ..services.stats import (
    material_stats,
    bin_stats,
    history_stats,
    critical_materials,
    most_active_materials,
    utilization_level,
)

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/dashboard")


@dashboard_bp.route("/")
@login_required
def dashboard():
    """
    Dashboard de materiales:
    - KPIs de stock y utilización
    - Actividad de hoy (llenado / retirado / cambio neto)
    - Estado por BIN
    - Materiales críticos y más activos
    """
    store = get_store()
    materials = store.materials
    history = store.history

    stats = material_stats(materials)

    return render_template(
        "dashboard/dashboard.html",
        stats=stats,
        level=utilization_level(stats["utilization"]),
        history_stats=history_stats(history),
        bins=bin_stats(materials),
        criticos=critical_materials(materials, current_app.config["CRITICAL_STOCK_RATIO"]),
        activos=most_active_materials(materials, history, current_app.config["MOST_ACTIVE_LIMIT"]),
    )
