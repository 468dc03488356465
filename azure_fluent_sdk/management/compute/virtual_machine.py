"""Compute virtual machines."""

from typing import List, Optional, Protocol

from azure_fluent_sdk.common.sync_adapter import EventLoopThread, block_and_map
from azure_fluent_sdk.management.compute.models import (
    DiagnosticsProfile,
    HardwareProfile,
    InstanceViewStatus,
    NetworkProfile,
    OSProfile,
    Plan,
    StorageProfile,
    VirtualMachineExtensionInner,
    VirtualMachineIdentity,
    VirtualMachineInner,
    VirtualMachineInstanceViewInner,
)
from azure_fluent_sdk.management.resources import (
    GroupableResource,
    SubResource,
    wrap_list,
)


class VirtualMachinesInnerClient(Protocol):
    async def create_or_update(
        self, resource_group_name: str, vm_name: str, parameters: VirtualMachineInner
    ) -> VirtualMachineInner: ...

    async def get_by_resource_group(
        self, resource_group_name: str, vm_name: str
    ) -> VirtualMachineInner: ...


class VirtualMachineExtension:
    """Read-only view of an extension installed on a virtual machine."""

    def __init__(self, inner: VirtualMachineExtensionInner):
        self._inner = inner

    def inner(self) -> VirtualMachineExtensionInner:
        return self._inner

    @property
    def id(self) -> Optional[str]:
        return self._inner.id

    @property
    def name(self) -> Optional[str]:
        return self._inner.name

    @property
    def publisher(self) -> Optional[str]:
        return self._inner.publisher

    @property
    def extension_type(self) -> Optional[str]:
        return self._inner.virtual_machine_extension_type

    @property
    def type_handler_version(self) -> Optional[str]:
        return self._inner.type_handler_version

    @property
    def provisioning_state(self) -> Optional[str]:
        return self._inner.provisioning_state


class VirtualMachineInstanceView:
    """Read-only view of the runtime state of a virtual machine."""

    def __init__(self, inner: VirtualMachineInstanceViewInner):
        self._inner = inner

    def inner(self) -> VirtualMachineInstanceViewInner:
        return self._inner

    @property
    def computer_name(self) -> Optional[str]:
        return self._inner.computer_name

    @property
    def os_name(self) -> Optional[str]:
        return self._inner.os_name

    @property
    def os_version(self) -> Optional[str]:
        return self._inner.os_version

    @property
    def statuses(self) -> List[InstanceViewStatus]:
        return list(self._inner.statuses)

    @property
    def power_state(self) -> Optional[str]:
        """Code of the ``PowerState/...`` status, e.g. ``PowerState/running``."""
        for status in self._inner.statuses:
            if status.code and status.code.startswith("PowerState/"):
                return status.code
        return None


class VirtualMachine(GroupableResource[VirtualMachineInner]):
    """Fluent wrapper for a Compute virtual machine."""

    def __init__(
        self,
        name: str,
        inner: VirtualMachineInner,
        client: VirtualMachinesInnerClient,
        runner: EventLoopThread,
    ):
        super().__init__(name, inner, runner)
        self.client = client

    async def create_resource_async(self) -> "VirtualMachine":
        inner = await self.client.create_or_update(
            self._require_resource_group(), self.name, self.inner()
        )
        return self._inner_to_fluent(inner)

    async def get_inner_async(self) -> VirtualMachineInner:
        return await self.client.get_by_resource_group(
            self._require_resource_group(), self.name
        )

    @property
    def availability_set(self) -> Optional[SubResource]:
        return self.inner().availability_set

    @property
    def diagnostics_profile(self) -> Optional[DiagnosticsProfile]:
        return self.inner().diagnostics_profile

    @property
    def hardware_profile(self) -> Optional[HardwareProfile]:
        return self.inner().hardware_profile

    @property
    def identity(self) -> Optional[VirtualMachineIdentity]:
        return self.inner().identity

    @property
    def instance_view(self) -> Optional[VirtualMachineInstanceView]:
        inner = self.inner().instance_view
        if inner is None:
            return None
        return VirtualMachineInstanceView(inner)

    @property
    def license_type(self) -> Optional[str]:
        return self.inner().license_type

    @property
    def network_profile(self) -> Optional[NetworkProfile]:
        return self.inner().network_profile

    @property
    def os_profile(self) -> Optional[OSProfile]:
        return self.inner().os_profile

    @property
    def plan(self) -> Optional[Plan]:
        return self.inner().plan

    @property
    def provisioning_state(self) -> Optional[str]:
        return self.inner().provisioning_state

    @property
    def resources(self) -> List[VirtualMachineExtension]:
        return wrap_list(self.inner().resources, VirtualMachineExtension)

    @property
    def storage_profile(self) -> Optional[StorageProfile]:
        return self.inner().storage_profile

    @property
    def vm_id(self) -> Optional[str]:
        return self.inner().vm_id

    @property
    def zones(self) -> Optional[List[str]]:
        return self.inner().zones

    def with_availability_set(self, availability_set: SubResource) -> "VirtualMachine":
        self.inner().availability_set = availability_set
        return self

    def with_diagnostics_profile(
        self, diagnostics_profile: DiagnosticsProfile
    ) -> "VirtualMachine":
        self.inner().diagnostics_profile = diagnostics_profile
        return self

    def with_hardware_profile(self, hardware_profile: HardwareProfile) -> "VirtualMachine":
        self.inner().hardware_profile = hardware_profile
        return self

    def with_identity(self, identity: VirtualMachineIdentity) -> "VirtualMachine":
        self.inner().identity = identity
        return self

    def with_license_type(self, license_type: str) -> "VirtualMachine":
        self.inner().license_type = license_type
        return self

    def with_network_profile(self, network_profile: NetworkProfile) -> "VirtualMachine":
        self.inner().network_profile = network_profile
        return self

    def with_os_profile(self, os_profile: OSProfile) -> "VirtualMachine":
        self.inner().os_profile = os_profile
        return self

    def with_plan(self, plan: Plan) -> "VirtualMachine":
        self.inner().plan = plan
        return self

    def with_storage_profile(self, storage_profile: StorageProfile) -> "VirtualMachine":
        self.inner().storage_profile = storage_profile
        return self

    def with_zones(self, zones: List[str]) -> "VirtualMachine":
        self.inner().zones = list(zones)
        return self


class ComputeManager:
    """Entry point for Compute resources."""

    def __init__(
        self,
        virtual_machines: VirtualMachinesInnerClient,
        runner: Optional[EventLoopThread] = None,
    ):
        self.virtual_machines = virtual_machines
        self._owns_runner = runner is None
        self.runner = runner or EventLoopThread()

    def define_virtual_machine(self, name: str) -> VirtualMachine:
        return VirtualMachine(
            name, VirtualMachineInner(name=name), self.virtual_machines, self.runner
        )

    def get_virtual_machine(self, resource_group_name: str, name: str) -> VirtualMachine:
        """Fetch an existing virtual machine."""
        return block_and_map(
            lambda: self.virtual_machines.get_by_resource_group(resource_group_name, name),
            lambda inner: VirtualMachine(
                name, inner, self.virtual_machines, self.runner
            ).with_existing_resource_group(resource_group_name),
            runner=self.runner,
        )

    def close(self) -> None:
        """Close the event loop thread if this manager created it."""
        if self._owns_runner:
            self.runner.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
