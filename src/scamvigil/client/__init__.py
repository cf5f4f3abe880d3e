"""Backend access: RPC client, sign-in gate, and history persistence."""

from .auth import AuthGate
from .history import save_best_effort
from .remote import RemoteClient

__all__ = ["AuthGate", "RemoteClient", "save_best_effort"]
