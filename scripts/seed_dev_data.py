"""Seed dev doctors and patients, then print a bearer token per doctor.

Creates each doctor (by email; skipped if present) and each patient
(by id; skipped if present). Tokens are signed with SECRET_KEY so they work
against a locally running API.

Usage:
    uv run python -m scripts.seed_dev_data [path/to/seed-data.json]

Without a path, a small built-in data set is used. JSON shape:
    {"doctors": [{"id", "name", "email", "specialty", "hospital"}],
     "patients": [{"id", "name", "age", "phone_number", "doctor_email"}]}
Requires: DATABASE_URL, SECRET_KEY, schema created via `alembic upgrade head`.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from sqlalchemy import select

from app.infrastructure.persistence import database
from app.infrastructure.persistence.models import Patient, User
from app.infrastructure.security.jwt import create_access_token

DEFAULT_SEED: dict[str, list[dict[str, Any]]] = {
    "doctors": [
        {"name": "Dr. Amina Nakato", "email": "amina@earprobe.test",
         "specialty": "ENT", "hospital": "Mulago National Referral"},
        {"name": "Dr. Brian Okello", "email": "brian@earprobe.test",
         "specialty": "Audiology", "hospital": "Nsambya Hospital"},
        {"name": "Dr. Grace Atim", "email": "grace@earprobe.test",
         "specialty": "Paediatrics", "hospital": "Mengo Hospital"},
    ],
    "patients": [
        {"name": "Patient One", "age": 7, "doctor_email": "amina@earprobe.test"},
        {"name": "Patient Two", "age": 45, "doctor_email": "brian@earprobe.test"},
    ],
}


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_URL when run as script."""
    load_dotenv(_project_root() / ".env", override=True)


async def seed(data: dict[str, list[dict[str, Any]]]) -> dict[str, str]:
    """Insert missing doctors and patients. Returns doctor email -> identity id."""
    database._ensure_engine()
    assert database.AsyncSessionLocal is not None
    ids_by_email: dict[str, str] = {}
    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            for doc in data.get("doctors", []):
                result = await session.execute(select(User).where(User.email == doc["email"]))
                user = result.scalar_one_or_none()
                if user is None:
                    user = User(
                        name=doc["name"],
                        email=doc["email"],
                        specialty=doc.get("specialty"),
                        hospital=doc.get("hospital"),
                    )
                    if doc.get("id"):
                        user.id = doc["id"]
                    session.add(user)
                    await session.flush()
                    print(f"  + doctor {user.email} ({user.id})")
                ids_by_email[user.email] = user.id

            for pat in data.get("patients", []):
                doctor_id = ids_by_email.get(pat["doctor_email"])
                if doctor_id is None:
                    print(f"  ! skipping patient {pat['name']}: unknown doctor {pat['doctor_email']}")
                    continue
                if pat.get("id") and await session.get(Patient, pat["id"]) is not None:
                    continue
                patient = Patient(
                    name=pat["name"],
                    age=pat.get("age"),
                    phone_number=pat.get("phone_number"),
                    doctor_id=doctor_id,
                )
                if pat.get("id"):
                    patient.id = pat["id"]
                session.add(patient)
                await session.flush()
                print(f"  + patient {patient.name} ({patient.id}) -> {pat['doctor_email']}")
    await database.dispose_engine()
    return ids_by_email


def main() -> None:
    _load_env()
    data = DEFAULT_SEED
    if len(sys.argv) > 1:
        data = json.loads(Path(sys.argv[1]).read_text(encoding="utf-8"))
    print("Seeding EarProbe dev data...")
    ids_by_email = asyncio.run(seed(data))
    print("\nBearer tokens:")
    for email, identity_id in ids_by_email.items():
        print(f"  {email}: {create_access_token({'sub': identity_id})}")


if __name__ == "__main__":
    main()
