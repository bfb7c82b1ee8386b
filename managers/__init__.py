from .signals import StoreSignals
from .logging_manager import LoggingManager
from .resolver_store import ResolverStore

__all__ = [
    'StoreSignals',
    'LoggingManager',
    'ResolverStore',
    ]
