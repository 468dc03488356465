"""Fluent wrappers for Azure Resource Manager resources."""

from .resources import GroupableResource, Resource, SubResource

__all__ = ["GroupableResource", "Resource", "SubResource"]
