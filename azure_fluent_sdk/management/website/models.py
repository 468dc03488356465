"""Models of the App Service domain registration API."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from azure_fluent_sdk.management.resources import Resource


class DomainStatus(str, Enum):
    """Registration status of a domain."""

    ACTIVE = "Active"
    AWAITING = "Awaiting"
    CANCELLED = "Cancelled"
    CONFISCATED = "Confiscated"
    DISABLED = "Disabled"
    EXPIRED = "Expired"
    PENDING = "Pending"
    UNKNOWN = "Unknown"


class Contact(BaseModel):
    """Contact information for domain registration."""

    email: str
    name_first: str
    name_last: str
    phone: str
    name_middle: Optional[str] = None
    organization: Optional[str] = None
    job_title: Optional[str] = None
    fax: Optional[str] = None


class HostName(BaseModel):
    name: Optional[str] = None
    site_names: List[str] = Field(default_factory=list)
    azure_resource_name: Optional[str] = None


class DomainPurchaseConsent(BaseModel):
    """Consent to the legal agreements of a top-level domain.

    Attributes:
        agreement_keys (List[str]): Keys of the accepted agreements.
        agreed_by (Optional[str]): Client IP address of the party that agreed.
        agreed_at (Optional[datetime]): When the agreements were accepted.
    """

    agreement_keys: List[str] = Field(default_factory=list)
    agreed_by: Optional[str] = None
    agreed_at: Optional[datetime] = None


class TldLegalAgreement(BaseModel):
    agreement_key: str
    title: Optional[str] = None
    content: Optional[str] = None
    url: Optional[str] = None


class DomainInner(Resource):
    """Domain resource as exchanged with the domains REST client."""

    contact_admin: Optional[Contact] = None
    contact_billing: Optional[Contact] = None
    contact_registrant: Optional[Contact] = None
    contact_tech: Optional[Contact] = None
    registration_status: Optional[DomainStatus] = None
    provisioning_state: Optional[str] = None
    name_servers: Optional[List[str]] = None
    privacy: Optional[bool] = None
    created_time: Optional[datetime] = None
    expiration_time: Optional[datetime] = None
    last_renewed_time: Optional[datetime] = None
    auto_renew: Optional[bool] = None
    ready_for_dns_record_management: Optional[bool] = None
    managed_host_names: Optional[List[HostName]] = None
    consent: Optional[DomainPurchaseConsent] = None
