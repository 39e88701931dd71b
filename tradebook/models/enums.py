from enum import Enum


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class TradeDirection(str, Enum):
    LONG = "long"
    SHORT = "short"


class TradeResult(str, Enum):
    TARGET = "target"
    STOP_LOSS = "stop_loss"
    BREAKEVEN = "breakeven"
    PARTIAL = "partial"
    NOT_FILLED = "not_filled"
