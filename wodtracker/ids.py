# wodtracker/ids.py
import secrets
from typing import Annotated

from fastapi import Path
from pydantic import StringConstraints

OBJECT_ID_PATTERN = r"^[0-9a-fA-F]{24}$"

ObjectId = Annotated[
    str, StringConstraints(pattern=OBJECT_ID_PATTERN, to_lower=True)
]


def generate_id() -> str:
    """24 hex characters, the same shape as a Mongo ObjectId."""
    return secrets.token_hex(12)


def id_path(description: str):
    return Path(..., pattern=OBJECT_ID_PATTERN, description=description)
