from .wallets_service import WalletsService, wallets_service

__all__ = [
    "WalletsService",
    "wallets_service",
]
