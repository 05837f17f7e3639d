from sqlalchemy import Table, Column, Integer, String, UniqueConstraint

from models import metadata

paths = Table(
    "paths",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("path", String(length=255), nullable=False),
    Column("domain", String(length=255), nullable=False, index=True),
    Column("redirect_url", String(length=2048), nullable=False),
    UniqueConstraint("path", "domain", name="uq_paths_path_domain"),
)
