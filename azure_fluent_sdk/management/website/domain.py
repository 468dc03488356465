"""
App Service domain registrations.

Purchasing a domain requires consent to the legal agreements of its top-level
domain. ``Domain.create()`` looks those agreements up, records the consent
(agreement keys, the local host address and the current UTC time) on the inner
model, and then creates the domain.
"""

from datetime import datetime, timezone
from typing import Any, AsyncIterable, List, Optional, Protocol

from azure_fluent_sdk.common.error_codes import ManagementError
from azure_fluent_sdk.common.sync_adapter import EventLoopThread, block_and_map
from azure_fluent_sdk.common.utils import (
    get_local_host_address,
    run_sync,
    to_primitive_bool,
)
from azure_fluent_sdk.constants import DOMAIN_DEFAULT_LOCATION
from azure_fluent_sdk.management.resources import GroupableResource
from azure_fluent_sdk.management.website.models import (
    Contact,
    DomainInner,
    DomainPurchaseConsent,
    DomainStatus,
    HostName,
    TldLegalAgreement,
)
from azure_fluent_sdk.observability.logger_adaptor import get_logger

logger = get_logger(__name__)


class DomainsInnerClient(Protocol):
    async def create_or_update(
        self, resource_group_name: str, domain_name: str, domain: DomainInner
    ) -> DomainInner: ...

    async def get(self, resource_group_name: str, domain_name: str) -> DomainInner: ...


class TopLevelDomainsInnerClient(Protocol):
    def list_agreements(self, name: str) -> AsyncIterable[TldLegalAgreement]: ...


class Domain(GroupableResource[DomainInner]):
    """Fluent wrapper for an App Service domain."""

    def __init__(
        self,
        name: str,
        inner: DomainInner,
        client: DomainsInnerClient,
        top_level_client: TopLevelDomainsInnerClient,
        runner: EventLoopThread,
    ):
        super().__init__(name, inner, runner)
        self.client = client
        self.top_level_client = top_level_client
        self.inner().location = DOMAIN_DEFAULT_LOCATION

    @property
    def top_level_domain(self) -> str:
        return self.name.split(".")[-1]

    async def _list_agreement_keys(self) -> List[str]:
        keys = []
        async for agreement in self.top_level_client.list_agreements(
            self.top_level_domain
        ):
            keys.append(agreement.agreement_key)
        return keys

    async def create_resource_async(self) -> "Domain":
        keys = await self._list_agreement_keys()
        logger.debug(
            f"Accepting {len(keys)} agreement(s) for .{self.top_level_domain} on behalf of {self.name}"
        )
        self.inner().consent = DomainPurchaseConsent(
            agreement_keys=keys,
            agreed_by=await run_sync(get_local_host_address)(),
            agreed_at=datetime.now(timezone.utc),
        )
        inner = await self.client.create_or_update(
            self._require_resource_group(), self.name, self.inner()
        )
        return self._inner_to_fluent(inner)

    async def get_inner_async(self) -> DomainInner:
        return await self.client.get(self._require_resource_group(), self.name)

    @property
    def admin_contact(self) -> Optional[Contact]:
        return self.inner().contact_admin

    @property
    def billing_contact(self) -> Optional[Contact]:
        return self.inner().contact_billing

    @property
    def registrant_contact(self) -> Optional[Contact]:
        return self.inner().contact_registrant

    @property
    def tech_contact(self) -> Optional[Contact]:
        return self.inner().contact_tech

    @property
    def registration_status(self) -> Optional[DomainStatus]:
        return self.inner().registration_status

    @property
    def name_servers(self) -> Optional[List[str]]:
        return self.inner().name_servers

    @property
    def privacy(self) -> bool:
        return to_primitive_bool(self.inner().privacy)

    @property
    def created_time(self) -> Optional[datetime]:
        return self.inner().created_time

    @property
    def expiration_time(self) -> Optional[datetime]:
        return self.inner().expiration_time

    @property
    def last_renewed_time(self) -> Optional[datetime]:
        return self.inner().last_renewed_time

    @property
    def auto_renew(self) -> bool:
        return to_primitive_bool(self.inner().auto_renew)

    @property
    def ready_for_dns_record_management(self) -> bool:
        return to_primitive_bool(self.inner().ready_for_dns_record_management)

    @property
    def managed_host_names(self) -> Optional[List[HostName]]:
        return self.inner().managed_host_names

    @property
    def consent(self) -> Optional[DomainPurchaseConsent]:
        return self.inner().consent

    def with_admin_contact(self, contact: Contact) -> "Domain":
        self.inner().contact_admin = contact
        return self

    def with_billing_contact(self, contact: Contact) -> "Domain":
        self.inner().contact_billing = contact
        return self

    def with_registrant_contact(self, contact: Contact) -> "Domain":
        self.inner().contact_registrant = contact
        return self

    def with_tech_contact(self, contact: Contact) -> "Domain":
        self.inner().contact_tech = contact
        return self

    def with_contact(self, contact: Contact) -> "Domain":
        """Use ``contact`` for the admin, billing, registrant and tech roles."""
        return (
            self.with_admin_contact(contact)
            .with_billing_contact(contact)
            .with_registrant_contact(contact)
            .with_tech_contact(contact)
        )

    def with_domain_privacy_enabled(self, domain_privacy: bool) -> "Domain":
        self.inner().privacy = domain_privacy
        return self

    def with_auto_renew_enabled(self, auto_renew: bool) -> "Domain":
        self.inner().auto_renew = auto_renew
        return self

    def with_name_server(self, name_server: str) -> "Domain":
        if self.inner().name_servers is None:
            self.inner().name_servers = []
        self.inner().name_servers.append(name_server)
        return self

    def with_name_servers(self, name_servers: List[str]) -> "Domain":
        if self.inner().name_servers is None:
            self.inner().name_servers = []
        self.inner().name_servers.extend(name_servers)
        return self


class AppServiceManager:
    """Entry point for App Service domain resources.

    Attributes:
        domains (DomainsInnerClient): Generated domains REST client.
        top_level_domains (TopLevelDomainsInnerClient): Generated top-level domains REST client.
        runner (EventLoopThread): Loop shared by every resource of this manager.
    """

    def __init__(
        self,
        domains: DomainsInnerClient,
        top_level_domains: TopLevelDomainsInnerClient,
        runner: Optional[EventLoopThread] = None,
    ):
        self.domains = domains
        self.top_level_domains = top_level_domains
        self._owns_runner = runner is None
        self.runner = runner or EventLoopThread()

    def define_domain(self, name: str) -> Domain:
        """Start the definition of a new domain, e.g. ``contoso.com``."""
        if "." not in name.strip("."):
            raise ManagementError(
                f"{ManagementError.RESOURCE_NAME_ERROR}: '{name}' has no top-level domain"
            )
        return self._wrap(name, DomainInner(name=name))

    def get_domain(self, resource_group_name: str, name: str) -> Domain:
        """Fetch an existing domain."""
        return block_and_map(
            lambda: self.domains.get(resource_group_name, name),
            lambda inner: self._wrap(name, inner).with_existing_resource_group(
                resource_group_name
            ),
            runner=self.runner,
        )

    def _wrap(self, name: str, inner: Any) -> Domain:
        return Domain(name, inner, self.domains, self.top_level_domains, self.runner)

    def close(self) -> None:
        """Close the event loop thread if this manager created it."""
        if self._owns_runner:
            self.runner.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
