"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts without any configuration, serving the single church
tenant configured below.  In a production deployment you should
override these via environment variables.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Church Site API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional path of a log file.  When empty only console logging is
    # configured.
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database file.  Relative paths are resolved
    # against the package root by ``core.db.resolve_database_path``.
    database_url: str = os.getenv("DATABASE_URL", "church_site.db")

    # Origin of the single‑page frontend allowed to call the API from
    # the browser.
    frontend_url: str = os.getenv("FRONTEND_URL", "http://localhost:5173")

    # The tenant every request is served for.  Only one tenant exists
    # for now; see ``core.tenant.ConstantTenantResolver``.
    tenant_id: int = int(os.getenv("TENANT_ID", "1"))
    tenant_name: str = os.getenv("TENANT_NAME", "Gislev Kirke")
    tenant_domain: str = os.getenv("TENANT_DOMAIN", "gislevkirke.dk")

    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "3001"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables
# should be set before importing this module.
settings = Settings()
