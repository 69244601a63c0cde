"""Token-provider (Firebase) adapters."""

from .keys import (
    FirebaseKeySource,
    KeySourceError,
    MockFirebaseKeySource,
    RealFirebaseKeySource,
)

__all__ = [
    "FirebaseKeySource",
    "KeySourceError",
    "MockFirebaseKeySource",
    "RealFirebaseKeySource",
]
