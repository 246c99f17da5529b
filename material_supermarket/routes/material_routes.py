from flask import Blueprint, render_template, request, redirect, url_for, flash
from flask_login import login_required, current_user

from ..errors import InventoryError
from ..models.material import BIN_NUMBERS
from ..services import get_store
from ..services.stats import filter_materials, material_stats

materials_bp = Blueprint("materials", __name__, url_prefix="/materials")


def _form_int(name):
    """Entero del formulario; si no se puede convertir se deja el texto para que falle la validación."""
    raw = request.form.get(name, "").strip()
    try:
        return int(raw)
    except ValueError:
        return raw


def _flash_sync(result, verbo):
    if result.sync_failed:
        flash(f"Material {verbo}, pero falló la sincronización automática con Excel.", "warning")


# =====================================================================================
#                                   LISTA MATERIALES
# =====================================================================================

@materials_bp.route("/")
@login_required
def list_materials():
    store = get_store()
    q = request.args.get("q", "").strip()

    return render_template(
        "materials/list.html",
        materials=filter_materials(store.materials, q),
        stats=material_stats(store.materials),
        history_count=len(store.ledger),
        bin_numbers=BIN_NUMBERS,
        auto_sync=store.auto_sync,
        last_sync_at=store.last_sync_at,
        q=q,
    )


# =====================================================================================
#                                   TOMAR / LLENAR
# =====================================================================================

@materials_bp.route("/<path:material_id>/take", methods=["POST"])
@login_required
def take(material_id):
    store = get_store()
    bin_number = _form_int("bin_number")
    quantity = _form_int("quantity")

    try:
        result = store.take_material(material_id, bin_number, quantity, user=current_user.username)
    except InventoryError as e:
        flash(str(e), "danger")
        return redirect(url_for("materials.list_materials"))

    entry = result.entry
    flash(
        f"Se tomaron {entry.quantity} de {entry.material_description} del BIN {entry.bin_number}.",
        "success",
    )
    _flash_sync(result, "tomado")
    return redirect(url_for("materials.list_materials"))


@materials_bp.route("/<path:material_id>/fill", methods=["POST"])
@login_required
def fill(material_id):
    store = get_store()
    bin_number = _form_int("bin_number")
    quantity = _form_int("quantity")

    try:
        result = store.fill_material(material_id, bin_number, quantity, user=current_user.username)
    except InventoryError as e:
        flash(str(e), "danger")
        return redirect(url_for("materials.list_materials"))

    entry = result.entry
    flash(
        f"Se llenaron {entry.quantity} de {entry.material_description} en el BIN {entry.bin_number}.",
        "success",
    )
    _flash_sync(result, "llenado")
    return redirect(url_for("materials.list_materials"))
