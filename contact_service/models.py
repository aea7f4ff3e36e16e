from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

from .errors import MissingFieldsError

REQUIRED_FIELDS = ("firstName", "lastName", "email", "mobile", "password", "address")

@dataclass
class ContactSubmission:
    first_name: str
    last_name: str
    email: str
    mobile: str
    password: str        # plaintext until replaced by the hash
    address: str
    image_path: Optional[str] = None

def build_submission(fields: Dict[str, str], image_path: Optional[str] = None) -> ContactSubmission:
    missing = [name for name in REQUIRED_FIELDS if not fields.get(name)]
    if missing:
        raise MissingFieldsError(missing)
    return ContactSubmission(
        first_name=fields["firstName"],
        last_name=fields["lastName"],
        email=fields["email"],
        mobile=fields["mobile"],
        password=fields["password"],
        address=fields["address"],
        image_path=image_path,
    )
