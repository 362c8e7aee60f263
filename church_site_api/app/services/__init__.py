"""
Service layer abstraction.

Each service encapsulates the logic of one domain.  The event and info
services are the tenant‑scoped stores; ``BannerService`` combines them
into the homepage banner feed.  Services receive their collaborators
in the constructor so handlers and tests can wire them explicitly.
"""
