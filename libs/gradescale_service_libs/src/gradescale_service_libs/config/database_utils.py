"""Database URL construction shared by services."""

from __future__ import annotations

import os
from urllib.parse import quote_plus


def build_database_url(
    *,
    database_name: str,
    service_env_var_prefix: str,
    is_production: bool,
    dev_port: int,
    dev_host: str = "localhost",
    url_encode_password: bool = True,
) -> str:
    """
    Build an async PostgreSQL URL for a service.

    Resolution order:
    1. {service_env_var_prefix}_DATABASE_URL
    2. SERVICE_DATABASE_URL
    3. Production: GRADESCALE_DB_USER plus GRADESCALE_PROD_DB_HOST/PORT/PASSWORD
    4. Development: GRADESCALE_DB_USER/GRADESCALE_DB_PASSWORD against dev_host:dev_port

    Raises:
        ValueError: If the credentials for the selected environment are missing
    """
    override = os.getenv(f"{service_env_var_prefix}_DATABASE_URL") or os.getenv(
        "SERVICE_DATABASE_URL"
    )
    if override:
        return override

    user = os.getenv("GRADESCALE_DB_USER")

    if is_production:
        host = os.getenv("GRADESCALE_PROD_DB_HOST")
        port = os.getenv("GRADESCALE_PROD_DB_PORT", "5432")
        password = os.getenv("GRADESCALE_PROD_DB_PASSWORD")
        if not (user and host and password):
            msg = (
                "Production database requires GRADESCALE_DB_USER, GRADESCALE_PROD_DB_HOST "
                "and GRADESCALE_PROD_DB_PASSWORD"
            )
            raise ValueError(msg)
    else:
        host = dev_host
        port = str(dev_port)
        password = os.getenv("GRADESCALE_DB_PASSWORD")
        if not (user and password):
            msg = "Development database requires GRADESCALE_DB_USER and GRADESCALE_DB_PASSWORD"
            raise ValueError(msg)

    encoded_password = quote_plus(password) if url_encode_password else password
    return f"postgresql+asyncpg://{user}:{encoded_password}@{host}:{port}/{database_name}"
