from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class DomainCreate(BaseModel):
    domain: Optional[str] = None


class DomainDelete(BaseModel):
    id: Optional[int] = None


class DomainRead(BaseModel):
    id: int
    domain: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DomainList(BaseModel):
    domains: list[str]
