"""Application interfaces (ports): repository and storage protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    IDirectMessageRepository,
    IMediaRecordRepository,
    IPatientRepository,
    IUserDirectory,
)
from app.application.interfaces.storage import ILocalStore, IPrimaryStore

__all__ = [
    "IDirectMessageRepository",
    "ILocalStore",
    "IMediaRecordRepository",
    "IPatientRepository",
    "IPrimaryStore",
    "IUserDirectory",
]
