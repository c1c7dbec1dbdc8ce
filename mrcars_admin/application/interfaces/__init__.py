"""Application interfaces (ports): store, auth provider, and realtime protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from mrcars_admin.infrastructure or mrcars_admin.api.
"""

from mrcars_admin.application.interfaces.auth import IAuthProvider
from mrcars_admin.application.interfaces.realtime import IInvalidationChannel
from mrcars_admin.application.interfaces.store import ICollectionStore

__all__ = [
    "IAuthProvider",
    "ICollectionStore",
    "IInvalidationChannel",
]
