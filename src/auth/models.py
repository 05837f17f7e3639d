from sqlalchemy import Table, Column, Integer, DateTime, String, func

from models import metadata

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("username", String(length=255), nullable=False, unique=True, index=True),
    Column("hashed_password", String(length=1024), nullable=False),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
)
