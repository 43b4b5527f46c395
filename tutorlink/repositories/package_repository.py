"""Repository for payment package reference data."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from tutorlink.db.models import PaymentPackage


class PackageRepository:
    """Read-only access to payment packages."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, package_id: str) -> PaymentPackage | None:
        return self.session.get(PaymentPackage, package_id)

    def get_package_by_curriculum_id(self, curriculum_id: str) -> PaymentPackage | None:
        query = select(PaymentPackage).where(PaymentPackage.curriculum_id == curriculum_id).order_by(PaymentPackage.id)
        return self.session.execute(query).scalars().first()
