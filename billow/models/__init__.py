from billow.models.account import AccountModel
from billow.models.receipt import ReceiptModel

__all__ = ["AccountModel", "ReceiptModel"]
