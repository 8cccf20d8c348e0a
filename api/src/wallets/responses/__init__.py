from .wallet_response import WalletResponse, WalletSettingsResponse

__all__ = [
    "WalletResponse",
    "WalletSettingsResponse",
]
