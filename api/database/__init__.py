from .database import engine, AsyncSessionLocal, Base, get_db, init_models
from .models import User, Wallet, Position, PositionTransaction

__all__ = [
    "engine",
    "AsyncSessionLocal",
    "Base",
    "get_db",
    "init_models",
    "User",
    "Wallet",
    "Position",
    "PositionTransaction",
]
