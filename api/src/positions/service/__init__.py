from .positions_service import PositionsService, positions_service

__all__ = [
    "PositionsService",
    "positions_service",
]
