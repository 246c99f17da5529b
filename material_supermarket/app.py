import logging
import os

from flask import Flask, redirect, url_for
from flask_login import LoginManager, current_user
from sqlalchemy import or_

from .config import Config
from .models import db
from .models.user import User
from .routes import register_blueprints
from .services import init_store

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)

# ==========================================================
# LOGIN MANAGER
# ==========================================================
login_manager = LoginManager()
login_manager.login_view = "auth.login"
login_manager.login_message = "Inicie sesión para continuar."
login_manager.login_message_category = "info"


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))


# ==========================================================
# CREATE_APP (FACTORÍA PRINCIPAL)
# ==========================================================
def create_app(config_object=Config, materials=None):
    app = Flask(__name__)
    app.config.from_object(config_object)

    os.makedirs(app.config["EXPORT_FOLDER"], exist_ok=True)

    # ======================================================
    # Inicializar extensiones
    # ======================================================
    db.init_app(app)
    login_manager.init_app(app)

    # Stock + historial en memoria (uno por instancia)
    init_store(app, materials)

    # Registrar rutas / blueprints
    register_blueprints(app)

    # ======================================================
    # Filtro de fecha
    # ======================================================
    @app.template_filter("format_fecha")
    def format_fecha(value):
        if value is None:
            return ""
        try:
            return value.strftime("%d/%m/%Y %H:%M")
        except AttributeError:
            return value

    # ======================================================
    # Ruta raíz → Materiales o Login
    # ======================================================
    @app.route("/")
    def index():
        if current_user.is_authenticated:
            return redirect(url_for("materials.list_materials"))
        return redirect(url_for("auth.login"))

    # ======================================================
    # Crear tablas + usuario OWNER
    # ======================================================
    with app.app_context():
        db.create_all()
        ensure_owner(app)

    logger.info("App lista: %s materiales en memoria", len(app.extensions["material_store"].materials))
    return app


def ensure_owner(app):
    """Crea o verifica el usuario owner configurado."""
    owner_email = app.config["OWNER_EMAIL"]
    owner = User.query.filter(
        or_(User.username == app.config["OWNER_USERNAME"], User.email == owner_email)
    ).first()

    if not owner:
        owner = User(
            username=app.config["OWNER_USERNAME"],
            email=owner_email,
            role="owner",
            status="active",
        )
        owner.set_password(app.config["OWNER_PASSWORD"])
        db.session.add(owner)
        db.session.commit()
        logger.info("OWNER creado: %s", owner.username)
    else:
        owner.role = "owner"
        db.session.commit()
        logger.info("OWNER verificado: %s", owner.username)

    return owner


# ==========================================================
# EJECUTAR LOCAL: python -m material_supermarket.app
# ==========================================================
if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", 8080)))
