from .app import create_app

__version__ = "1.0.0"
