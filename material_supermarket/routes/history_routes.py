from flask import Blueprint, render_template, request
from flask_login import login_required

from ..services import get_store
from ..services.stats import filter_history, history_stats, ACTION_ALL, SORT_NEWEST

history_bp = Blueprint("history", __name__, url_prefix="/history")


@history_bp.route("/")
@login_required
def list_history():
    store = get_store()
    history = store.history

    q = request.args.get("q", "").strip()
    action = request.args.get("action", ACTION_ALL)
    sort = request.args.get("sort", SORT_NEWEST)

    filtrado = filter_history(history, q, action, sort)

    return render_template(
        "history/list.html",
        entries=filtrado,
        stats=history_stats(history),
        total=len(history),
        q=q,
        action=action,
        sort=sort,
    )
