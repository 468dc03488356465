"""App Service domain management."""

from .domain import (
    AppServiceManager,
    Domain,
    DomainsInnerClient,
    TopLevelDomainsInnerClient,
)
from .models import (
    Contact,
    DomainInner,
    DomainPurchaseConsent,
    DomainStatus,
    HostName,
    TldLegalAgreement,
)

__all__ = [
    "AppServiceManager",
    "Domain",
    "DomainsInnerClient",
    "TopLevelDomainsInnerClient",
    "Contact",
    "DomainInner",
    "DomainPurchaseConsent",
    "DomainStatus",
    "HostName",
    "TldLegalAgreement",
]
