from flask import Blueprint, render_template, request, redirect, url_for, flash
from flask_login import login_required, current_user

from ..errors import InventoryError
from ..models.history import ADGI_DONE
from ..services import get_store
from ..services.adgi import consolidate, filter_groups, adgi_stats, STATUS_ALL
from ..services.stats import SORT_NEWEST

adgi_bp = Blueprint("adgi", __name__, url_prefix="/adgi")


@adgi_bp.route("/")
@login_required
def list_adgi():
    """Retiros consolidados por material con su estado ADGI."""
    store = get_store()
    history = store.history

    q = request.args.get("q", "").strip()
    status = request.args.get("status", STATUS_ALL)
    sort = request.args.get("sort", SORT_NEWEST)

    return render_template(
        "adgi/list.html",
        groups=filter_groups(consolidate(history), q, status, sort),
        stats=adgi_stats(history),
        q=q,
        status=status,
        sort=sort,
    )


@adgi_bp.route("/<path:material_id>/status", methods=["POST"])
@login_required
def update_status(material_id):
    store = get_store()
    status = request.form.get("status", "").strip()

    try:
        entries = store.set_adgi_status(material_id, status, user=current_user.username)
    except InventoryError as e:
        flash(str(e), "danger")
        return redirect(url_for("adgi.list_adgi"))

    etiqueta = "Done" if status == ADGI_DONE else "Pending"
    flash(f"Estado ADGI de {material_id} actualizado a {etiqueta} ({len(entries)} movimientos).", "success")
    return redirect(url_for("adgi.list_adgi"))
