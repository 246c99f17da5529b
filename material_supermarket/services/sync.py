import logging
import os

from ..utils.excel import export_live_snapshot

logger = logging.getLogger(__name__)


class LiveSnapshotSync:
    """
    Hook de auto-sync: reescribe el Excel "live" en la carpeta de exportación
    cada vez que cambia el stock. Los errores se propagan al store.
    """

    def __init__(self, folder, filename="Material_Management_Live.xlsx", recent_limit=50):
        self.folder = folder
        self.filename = filename
        self.recent_limit = recent_limit
        self.sync_count = 0

    @property
    def path(self):
        return os.path.join(self.folder, self.filename)

    def __call__(self, store):
        os.makedirs(self.folder, exist_ok=True)

        output = export_live_snapshot(store.materials, store.history, recent_limit=self.recent_limit)
        with open(self.path, "wb") as fh:
            fh.write(output.getvalue())

        self.sync_count += 1
        logger.info("Sync #%s -> %s", self.sync_count, self.path)
