"""Request/response models for reports, units, wallet and support records."""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

TransactionType = Literal["deposit", "refund", "withdrawal", "payment"]
TransactionStatus = Literal["pending", "completed", "failed"]
SupportStatus = Literal["open", "in_progress", "resolved", "closed"]


class CreateDailyReportRequest(BaseModel):
    child_id: str
    booking_id: str
    unit_id: str
    on_track: bool = True
    have_homework: bool = False
    notes: str | None = None


class UpdateDailyReportRequest(BaseModel):
    """Partial update. None leaves the field untouched."""

    notes: str | None = None
    on_track: bool | None = None
    have_homework: bool | None = None
    unit_id: str | None = None


class DailyReportView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    child_id: str
    tutor_id: str
    booking_id: str
    unit_id: str
    created_date: date
    on_track: bool
    have_homework: bool
    notes: str | None = None


class CreateUnitRequest(BaseModel):
    curriculum_id: str
    unit_name: str
    unit_description: str | None = None
    unit_order: int | None = Field(default=None, ge=1)
    is_active: bool = True


class UpdateUnitRequest(BaseModel):
    unit_name: str
    unit_description: str | None = None
    unit_order: int = Field(ge=1)
    is_active: bool = True


class UnitView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    curriculum_id: str
    unit_name: str
    unit_description: str | None = None
    unit_order: int
    is_active: bool


class CreateWalletTransactionRequest(BaseModel):
    parent_id: str
    contract_id: str | None = None
    amount: Decimal = Field(gt=0)
    transaction_type: TransactionType
    description: str | None = None
    payment_method: str | None = None


class UpdateWalletTransactionStatus(BaseModel):
    status: TransactionStatus


class WalletTransactionView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    parent_id: str
    contract_id: str | None = None
    amount: Decimal
    transaction_type: str
    description: str | None = None
    status: str
    payment_method: str | None = None
    transaction_date: datetime


class CreateSupportRequest(BaseModel):
    subject: str
    description: str
    category: str


class UpdateSupportRequest(CreateSupportRequest):
    pass


class AssignSupportRequest(BaseModel):
    assigned_to_user_id: str


class UpdateSupportRequestStatus(BaseModel):
    status: SupportStatus
    resolution: str | None = None
    admin_notes: str | None = None


class SupportRequestView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    assigned_to_user_id: str | None = None
    subject: str
    description: str
    category: str
    status: str
    resolution: str | None = None
    admin_notes: str | None = None
    created_at: datetime
    updated_at: datetime
    resolved_at: datetime | None = None
