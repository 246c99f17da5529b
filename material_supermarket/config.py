import os

# Ruta base del proyecto
BASE_DIR = os.path.abspath(os.path.dirname(__file__))


class Config:
    # Clave secreta Flask
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-material-supermarket")

    # Solo usuarios: el stock vive en memoria
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", f"sqlite:///{os.path.join(BASE_DIR, 'material_supermarket.db')}"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Subida de archivos Excel
    MAX_CONTENT_LENGTH = 20 * 1024 * 1024  # 20 MB
    UPLOAD_EXTENSIONS = [".xlsx", ".xls"]

    # Carpetas
    EXPORT_FOLDER = os.environ.get("EXPORT_FOLDER", os.path.join(BASE_DIR, "exports"))

    # Bookkeeping / dashboard
    AUTO_SYNC_ENABLED = True
    LIVE_SNAPSHOT_FILENAME = "Material_Management_Live.xlsx"
    RECENT_ACTIVITY_LIMIT = 50
    CRITICAL_STOCK_RATIO = 0.2
    MOST_ACTIVE_LIMIT = 5

    # Usuario owner creado al arrancar
    OWNER_USERNAME = os.environ.get("OWNER_USERNAME", "admin")
    OWNER_EMAIL = os.environ.get("OWNER_EMAIL", "admin@supermarket.local")
    OWNER_PASSWORD = os.environ.get("OWNER_PASSWORD", "Admin123#")


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "testing"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    AUTO_SYNC_ENABLED = False
