from __future__ import annotations
from sqlalchemy import text
from sqlalchemy.orm import Session

from .models import ContactSubmission

INSERT_SQL = """INSERT INTO contact_form (first_name, last_name, email, mobile, password, image_path, address)
                VALUES (:first_name, :last_name, :email, :mobile, :password, :image_path, :address)"""

def insert_submission(db: Session, sub: ContactSubmission) -> int:
    sql = INSERT_SQL
    returning = db.get_bind().dialect.name == "postgresql"
    if returning:
        sql += " RETURNING id"
    result = db.execute(
        text(sql),
        {
            "first_name": sub.first_name,
            "last_name": sub.last_name,
            "email": sub.email,
            "mobile": sub.mobile,
            "password": sub.password,
            "image_path": sub.image_path,
            "address": sub.address,
        },
    )
    new_id = result.scalar_one() if returning else result.lastrowid
    db.commit()
    return new_id
