# oltradius/models.py
from __future__ import annotations

from datetime import datetime

from .extensions import db


# DB columns are "timestamp without time zone"; app code standardizes on naive UTC.
def utcnow_naive() -> datetime:
    return datetime.utcnow()


# =========================================================
# Company (organization identity)
# =========================================================
# Maintained by the administrative side of the platform; this app only reads it.
class Company(db.Model):
    __tablename__ = "company"

    id = db.Column(db.Integer, primary_key=True)

    name = db.Column(db.String(160), nullable=True)
    email = db.Column(db.String(120), nullable=True)
    phone = db.Column(db.String(30), nullable=True)
    address = db.Column(db.String(255), nullable=True)

    # URL or storage identifier of the logo image
    logo = db.Column(db.String(500), nullable=True)

    base_url = db.Column(db.String(255), nullable=True)
    admin_phone = db.Column(db.String(30), nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow_naive)
    updated_at = db.Column(
        db.DateTime,
        nullable=False,
        default=utcnow_naive,
        onupdate=utcnow_naive,
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "logo": self.logo,
            "base_url": self.base_url,
            "admin_phone": self.admin_phone,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self) -> str:
        return f"<Company {self.id} {self.name}>"
