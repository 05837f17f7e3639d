from sqlalchemy import Table, Column, DateTime, String, Text, func

from models import metadata

TURNSTILE_ENABLED = "turnstile_enabled"
TURNSTILE_SITE_KEY = "turnstile_site_key"
TURNSTILE_SECRET_KEY = "turnstile_secret_key"
PRIMARY_DOMAIN = "primary_domain"

DEFAULT_SETTINGS = {
    TURNSTILE_ENABLED: "false",
    TURNSTILE_SITE_KEY: "",
    TURNSTILE_SECRET_KEY: "",
    PRIMARY_DOMAIN: "",
}

settings = Table(
    "settings",
    metadata,
    Column("key", String(length=255), primary_key=True),
    Column("value", Text, nullable=True),
    Column("updated_at", DateTime, nullable=False, server_default=func.now()),
)
