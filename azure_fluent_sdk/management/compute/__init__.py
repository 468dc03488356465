"""Compute virtual machine management."""

from .models import (
    BootDiagnostics,
    DiagnosticsProfile,
    HardwareProfile,
    ImageReference,
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
from .virtual_machine import (
    ComputeManager,
    VirtualMachine,
    VirtualMachineExtension,
    VirtualMachineInstanceView,
    VirtualMachinesInnerClient,
)

__all__ = [
    "ComputeManager",
    "VirtualMachine",
    "VirtualMachineExtension",
    "VirtualMachineInstanceView",
    "VirtualMachinesInnerClient",
    "BootDiagnostics",
    "DiagnosticsProfile",
    "HardwareProfile",
    "ImageReference",
    "InstanceViewStatus",
    "NetworkProfile",
    "OSProfile",
    "Plan",
    "StorageProfile",
    "VirtualMachineExtensionInner",
    "VirtualMachineIdentity",
    "VirtualMachineInner",
    "VirtualMachineInstanceViewInner",
]
