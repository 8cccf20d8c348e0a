from .wallet_settings_dto import WalletSettingsDto
from .create_wallet_dto import CreateWalletDto
from .update_wallet_dto import UpdateWalletDto

__all__ = [
    "WalletSettingsDto",
    "CreateWalletDto",
    "UpdateWalletDto",
]
