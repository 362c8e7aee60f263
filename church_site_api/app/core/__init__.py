"""
Shared building blocks used by every domain: settings, logging,
database handle, error types and tenant resolution.
"""
