"""Applicant resource records."""

from datetime import date, datetime
from typing import List, Optional

from pydantic import Field

from onfido_client.schemas.base import OnfidoModel


class IdNumber(OnfidoModel):
    type: str
    value: str
    state_code: Optional[str] = None


class Address(OnfidoModel):
    flat_number: Optional[str] = None
    building_number: Optional[str] = None
    building_name: Optional[str] = None
    street: Optional[str] = None
    sub_street: Optional[str] = None
    town: Optional[str] = None
    state: Optional[str] = None
    postcode: Optional[str] = None
    country: Optional[str] = Field(
        default=None,
        description="ISO 3166-1 alpha-3 country code",
    )
    line1: Optional[str] = None
    line2: Optional[str] = None
    line3: Optional[str] = None


class ApplicantRequest(OnfidoModel):
    """Body for creating or updating an applicant.

    Unset fields are omitted, so an update only touches what is given.
    """

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    dob: Optional[date] = None
    phone_number: Optional[str] = None
    id_numbers: Optional[List[IdNumber]] = None
    address: Optional[Address] = None


class Applicant(OnfidoModel):
    id: str
    created_at: Optional[datetime] = None
    delete_at: Optional[datetime] = None
    href: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    dob: Optional[date] = None
    phone_number: Optional[str] = None
    id_numbers: List[IdNumber] = Field(default_factory=list)
    address: Optional[Address] = None
    sandbox: Optional[bool] = None
