"""Request and response models for contracts."""

from datetime import date, time

from pydantic import BaseModel, Field


class CreateContractRequest(BaseModel):
    """Booking request that creates a contract.

    status stays a raw string here; ContractService parses it so an unknown
    literal fails with "Invalid status." before anything is written.
    """

    parent_id: str
    child_id: str
    package_id: str
    center_id: str | None = None
    main_tutor_id: str | None = None
    start_date: date
    end_date: date
    start_time: time
    end_time: time
    days_of_week: int = Field(description="Weekday bitmask, bit 0 = Sunday ... bit 6 = Saturday")
    is_online: bool = False
    offline_address: str | None = None
    video_call_platform: str | None = None
    status: str | None = "pending"


class UpdateContractStatusRequest(BaseModel):
    status: str


class AssignTutorsRequest(BaseModel):
    main_tutor_id: str


class ContractView(BaseModel):
    """Read projection of a contract with joined display names."""

    contract_id: str
    parent_id: str
    child_id: str
    child_name: str | None = None
    package_id: str
    package_name: str | None = None
    main_tutor_id: str | None = None
    main_tutor_name: str | None = None
    center_id: str | None = None
    center_name: str | None = None
    start_date: date
    end_date: date
    start_time: time
    end_time: time
    days_of_week: int
    days_of_week_display: str
    is_online: bool
    offline_address: str | None = None
    video_call_platform: str | None = None
    status: str
