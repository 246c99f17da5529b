from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

# Importar los modelos para registrarlos
from .user import User
from .material import Material, BIN_NUMBERS
from .history import (
    ACTION_TAKE,
    ACTION_FILL,
    ADGI_PENDING,
    ADGI_DONE,
    AdgiRecord,
    HistoryEntry,
    TakeEntry,
    FillEntry,
)
