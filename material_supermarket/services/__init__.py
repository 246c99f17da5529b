from flask import current_app

from .bookkeeping import MaterialStore
from .sync import LiveSnapshotSync

STORE_KEY = "material_store"


def init_store(app, materials=None):
    """Crea el store en memoria de esta instancia de la app."""
    sync = LiveSnapshotSync(
        folder=app.config["EXPORT_FOLDER"],
        filename=app.config["LIVE_SNAPSHOT_FILENAME"],
        recent_limit=app.config["RECENT_ACTIVITY_LIMIT"],
    )
    store = MaterialStore(
        materials=materials,
        auto_sync=app.config["AUTO_SYNC_ENABLED"],
        sync_hook=sync,
    )
    app.extensions[STORE_KEY] = store
    return store


def get_store() -> MaterialStore:
    return current_app.extensions[STORE_KEY]
