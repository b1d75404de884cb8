"""Type-safe enums for the spoke length calculator."""

from enum import Enum


class Side(Enum):
    """Wheel side (as seen from behind the bike)"""
    LEFT = "left"
    RIGHT = "right"


class NoticeLevel(Enum):
    """Severity of a user notification"""
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Language(Enum):
    """Languages available for user-facing messages"""
    EN = "en"
    JA = "ja"
