from .database import build_engine, build_session_factory, translate_store_errors
from .mailer import Mailer

__all__ = [
    "build_engine",
    "build_session_factory",
    "translate_store_errors",
    "Mailer",
]
