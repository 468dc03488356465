"""Models of the Compute virtual machines API."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from azure_fluent_sdk.management.resources import Resource, SubResource


class Plan(BaseModel):
    """Marketplace image plan."""

    name: Optional[str] = None
    publisher: Optional[str] = None
    product: Optional[str] = None
    promotion_code: Optional[str] = None


class HardwareProfile(BaseModel):
    vm_size: Optional[str] = None


class ImageReference(BaseModel):
    publisher: Optional[str] = None
    offer: Optional[str] = None
    sku: Optional[str] = None
    version: Optional[str] = None
    id: Optional[str] = None


class StorageProfile(BaseModel):
    image_reference: Optional[ImageReference] = None
    os_disk_name: Optional[str] = None
    data_disk_names: List[str] = Field(default_factory=list)


class OSProfile(BaseModel):
    computer_name: Optional[str] = None
    admin_username: Optional[str] = None
    admin_password: Optional[str] = Field(default=None, repr=False)
    custom_data: Optional[str] = None


class NetworkProfile(BaseModel):
    network_interfaces: List[SubResource] = Field(default_factory=list)


class BootDiagnostics(BaseModel):
    enabled: Optional[bool] = None
    storage_uri: Optional[str] = None


class DiagnosticsProfile(BaseModel):
    boot_diagnostics: Optional[BootDiagnostics] = None


class VirtualMachineIdentity(BaseModel):
    principal_id: Optional[str] = None
    tenant_id: Optional[str] = None
    type: Optional[str] = None


class InstanceViewStatus(BaseModel):
    code: Optional[str] = None
    level: Optional[str] = None
    display_status: Optional[str] = None
    message: Optional[str] = None
    time: Optional[datetime] = None


class VirtualMachineInstanceViewInner(BaseModel):
    """Runtime state of a virtual machine."""

    platform_update_domain: Optional[int] = None
    platform_fault_domain: Optional[int] = None
    computer_name: Optional[str] = None
    os_name: Optional[str] = None
    os_version: Optional[str] = None
    rdp_thumb_print: Optional[str] = None
    statuses: List[InstanceViewStatus] = Field(default_factory=list)


class VirtualMachineExtensionInner(Resource):
    """Extension installed on a virtual machine."""

    publisher: Optional[str] = None
    virtual_machine_extension_type: Optional[str] = None
    type_handler_version: Optional[str] = None
    auto_upgrade_minor_version: Optional[bool] = None
    settings: Optional[Dict[str, Any]] = None
    provisioning_state: Optional[str] = None


class VirtualMachineInner(Resource):
    """Virtual machine resource as exchanged with the virtual machines REST client."""

    plan: Optional[Plan] = None
    hardware_profile: Optional[HardwareProfile] = None
    storage_profile: Optional[StorageProfile] = None
    os_profile: Optional[OSProfile] = None
    network_profile: Optional[NetworkProfile] = None
    diagnostics_profile: Optional[DiagnosticsProfile] = None
    availability_set: Optional[SubResource] = None
    provisioning_state: Optional[str] = None
    instance_view: Optional[VirtualMachineInstanceViewInner] = None
    license_type: Optional[str] = None
    vm_id: Optional[str] = None
    resources: Optional[List[VirtualMachineExtensionInner]] = None
    identity: Optional[VirtualMachineIdentity] = None
    zones: Optional[List[str]] = None
