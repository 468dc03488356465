"""
Fluent wrappers for Azure Resource Manager resources that live in a resource group.

A fluent resource wraps the inner model produced by a generated REST client. The
``with_*`` setters edit the inner model and return the wrapper so calls can be
chained; ``create()``, ``apply()`` and ``refresh()`` block on the asynchronous
hooks implemented by each resource type.

Example:
    >>> vm = (
    ...     compute_manager.define_virtual_machine("vm1")
    ...     .with_region("westeurope")
    ...     .with_existing_resource_group("rg1")
    ...     .with_hardware_profile(HardwareProfile(vm_size="Standard_B1s"))
    ...     .create()
    ... )
"""

from abc import ABC, abstractmethod
from typing import Dict, Generic, List, Optional, TypeVar

from azure.core.exceptions import AzureError
from pydantic import BaseModel, Field

from azure_fluent_sdk.clients.azure.azure_utils import parse_resource_id
from azure_fluent_sdk.common.error_codes import ManagementError
from azure_fluent_sdk.common.sync_adapter import EventLoopThread, block_and_map
from azure_fluent_sdk.observability.logger_adaptor import get_logger

logger = get_logger(__name__)


class Resource(BaseModel):
    """Common fields of every tracked ARM resource model."""

    id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    location: Optional[str] = None
    tags: Dict[str, str] = Field(default_factory=dict)


class SubResource(BaseModel):
    """Reference to another resource by id."""

    id: Optional[str] = None


InnerT = TypeVar("InnerT", bound=Resource)


class GroupableResource(ABC, Generic[InnerT]):
    """Base class of fluent resources scoped to a resource group.

    Resources do not own a loop: they run on the loop of the manager that
    created them, which closes it.

    Attributes:
        runner (EventLoopThread): Loop the asynchronous hooks run on.
    """

    def __init__(self, name: str, inner: InnerT, runner: EventLoopThread):
        self._name = name
        self._inner = inner
        self._resource_group_name: Optional[str] = None
        self.runner = runner

    @property
    def name(self) -> str:
        return self._name

    def inner(self) -> InnerT:
        return self._inner

    def set_inner(self, inner: InnerT) -> None:
        self._inner = inner

    @property
    def id(self) -> Optional[str]:
        return self._inner.id

    @property
    def type(self) -> Optional[str]:
        return self._inner.type

    @property
    def region(self) -> Optional[str]:
        return self._inner.location

    @property
    def tags(self) -> Dict[str, str]:
        return dict(self._inner.tags)

    @property
    def resource_group_name(self) -> Optional[str]:
        """Resource group set explicitly, otherwise the one in the resource id."""
        if self._resource_group_name is not None:
            return self._resource_group_name
        if self._inner.id:
            return parse_resource_id(self._inner.id)["resource_group"]
        return None

    def is_in_create_mode(self) -> bool:
        return self._inner.id is None

    def with_region(self, region: str):
        self._inner.location = region
        return self

    def with_existing_resource_group(self, resource_group_name: str):
        self._resource_group_name = resource_group_name
        return self

    def with_tag(self, key: str, value: str):
        self._inner.tags[key] = value
        return self

    def with_tags(self, tags: Dict[str, str]):
        self._inner.tags = dict(tags)
        return self

    def without_tag(self, key: str):
        self._inner.tags.pop(key, None)
        return self

    def _require_resource_group(self) -> str:
        resource_group = self.resource_group_name
        if not resource_group:
            raise ManagementError(
                f"{ManagementError.RESOURCE_GROUP_MISSING_ERROR}: {type(self).__name__} '{self._name}'"
            )
        return resource_group

    def _inner_to_fluent(self, inner: InnerT):
        self.set_inner(inner)
        return self

    @abstractmethod
    async def create_resource_async(self):
        """Create the resource from the current inner model and return ``self``."""

    async def update_resource_async(self):
        """Push the current inner model to the service; creation and update share one call by default."""
        return await self.create_resource_async()

    @abstractmethod
    async def get_inner_async(self) -> InnerT:
        """Fetch the current inner model from the service."""

    async def refresh_async(self):
        return self._inner_to_fluent(await self.get_inner_async())

    def create(self):
        """Create the resource, blocking until the service responds.

        Raises:
            ManagementError: If no resource group is known.
            AzureError: If the service reports a failure.
            UnexpectedFailureError: For any other failure.
        """
        self._require_resource_group()
        logger.info(f"Creating {type(self).__name__} {self._name}")
        return block_and_map(
            self.create_resource_async,
            _identity,
            runner=self.runner,
            typed_errors=(AzureError,),
        )

    def apply(self):
        """Apply pending updates, blocking until the service responds."""
        self._require_resource_group()
        logger.info(f"Updating {type(self).__name__} {self._name}")
        return block_and_map(
            self.update_resource_async,
            _identity,
            runner=self.runner,
            typed_errors=(AzureError,),
        )

    def refresh(self):
        """Reload the inner model from the service."""
        self._require_resource_group()
        logger.debug(f"Refreshing {type(self).__name__} {self._name}")
        return block_and_map(
            self.refresh_async,
            _identity,
            runner=self.runner,
            typed_errors=(AzureError,),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, resource_group={self.resource_group_name!r})"


def _identity(value):
    return value


def wrap_list(items: Optional[List], wrapper) -> List:
    """Wrap each inner model of ``items``; a missing list gives an empty one."""
    if items is None:
        return []
    return [wrapper(item) for item in items]
