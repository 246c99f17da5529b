from .auth_routes import auth_bp
from .material_routes import materials_bp
from .dashboard_routes import dashboard_bp
from .history_routes import history_bp
from .adgi_routes import adgi_bp
from .excel_routes import excel_bp


def register_blueprints(app):
    app.register_blueprint(auth_bp)
    app.register_blueprint(materials_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(history_bp)
    app.register_blueprint(adgi_bp)
    app.register_blueprint(excel_bp)
