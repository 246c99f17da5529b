import os

from flask import Blueprint, render_template, request, redirect, url_for, flash, send_file, current_app
from flask_login import login_required

from ..errors import ImportParseError
from ..services import get_store
from ..utils.excel import (
    XLSX_MIMETYPE,
    export_snapshot,
    export_live_snapshot,
    create_template,
    export_filename,
    load_materials_excel,
)

excel_bp = Blueprint("excel", __name__, url_prefix="/excel")


# =====================================================================================
#                                   PANEL EXCEL
# =====================================================================================

@excel_bp.route("/")
@login_required
def panel():
    store = get_store()
    sync = store.sync_hook

    return render_template(
        "excel/panel.html",
        materials_count=len(store.materials),
        transactions_count=len(store.ledger),
        total_stock=sum(m.total_stock for m in store.materials),
        auto_sync=store.auto_sync,
        sync_count=getattr(sync, "sync_count", 0),
        last_sync_at=store.last_sync_at,
    )


# =====================================================================================
#                                   EXPORTACIONES
# =====================================================================================

@excel_bp.route("/export")
@login_required
def export_complete():
    store = get_store()
    output = export_snapshot(store.materials, store.history)

    return send_file(
        output,
        as_attachment=True,
        download_name=export_filename("Material_Management_Complete"),
        mimetype=XLSX_MIMETYPE,
    )


@excel_bp.route("/live")
@login_required
def export_live():
    store = get_store()
    output = export_live_snapshot(
        store.materials, store.history, recent_limit=current_app.config["RECENT_ACTIVITY_LIMIT"]
    )

    return send_file(
        output,
        as_attachment=True,
        download_name="Material_Management_Live_Snapshot.xlsx",
        mimetype=XLSX_MIMETYPE,
    )


@excel_bp.route("/template")
@login_required
def export_template():
    store = get_store()
    output = create_template(store.materials, auto_sync_enabled=store.auto_sync)

    return send_file(
        output,
        as_attachment=True,
        download_name="Material_Management_Template.xlsx",
        mimetype=XLSX_MIMETYPE,
    )


# =====================================================================================
#                                   IMPORTACIÓN
# =====================================================================================

@excel_bp.route("/import", methods=["POST"])
@login_required
def import_materials():
    """Reemplaza todo el stock con el Excel subido. El historial se conserva."""
    file = request.files.get("file")

    if not file or not file.filename:
        flash("Debe seleccionar un archivo de Excel.", "warning")
        return redirect(url_for("excel.panel"))

    ext = os.path.splitext(file.filename)[1].lower()
    if ext not in current_app.config["UPLOAD_EXTENSIONS"]:
        flash("Formato no permitido. Use .xlsx o .xls.", "warning")
        return redirect(url_for("excel.panel"))

    try:
        materials = load_materials_excel(file)
    except ImportParseError as e:
        flash(str(e), "danger")
        return redirect(url_for("excel.panel"))

    store = get_store()
    _, error = store.replace_materials(materials)

    flash(f"{len(materials)} materiales importados desde Excel.", "success")
    if error is not None:
        flash("Materiales importados, pero falló la sincronización automática con Excel.", "warning")

    return redirect(url_for("materials.list_materials"))


@excel_bp.route("/auto-sync", methods=["POST"])
@login_required
def toggle_auto_sync():
    store = get_store()
    store.set_auto_sync(not store.auto_sync)

    flash(f"Auto-sync Excel {'activado' if store.auto_sync else 'desactivado'}.", "success")
    return redirect(request.referrer or url_for("excel.panel"))
