"""
SenderType - who wrote a message.
"""

from enum import Enum


class SenderType(str, Enum):
    USER = "USER"
    ASSISTANT = "ASSISTANT"
