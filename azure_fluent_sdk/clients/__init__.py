"""Service clients of the azure-fluent-sdk."""
