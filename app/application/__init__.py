"""Application layer: DTOs, interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, storage tiers).
"""

from app.application.interfaces import (
    IDirectMessageRepository,
    ILocalStore,
    IMediaRecordRepository,
    IPatientRepository,
    IPrimaryStore,
    IUserDirectory,
)

__all__ = [
    "IDirectMessageRepository",
    "ILocalStore",
    "IMediaRecordRepository",
    "IPatientRepository",
    "IPrimaryStore",
    "IUserDirectory",
]
