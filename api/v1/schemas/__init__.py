"""Re-export individual schema modules for easy imports."""

from .chat import MessageIn, SessionStatus, TurnsOut
from .form import FieldStateOut, FormEventIn, FormOut, SubmitOut

__all__ = [
    "MessageIn",
    "SessionStatus",
    "TurnsOut",
    "FieldStateOut",
    "FormEventIn",
    "FormOut",
    "SubmitOut",
]
