from sqlalchemy import Table, Column, Integer, DateTime, String, func

from models import metadata

domains = Table(
    "domains",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("domain", String(length=255), nullable=False, unique=True),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
)
