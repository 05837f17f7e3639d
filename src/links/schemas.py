from typing import Optional
from pydantic import BaseModel


class LinkCreate(BaseModel):
    path: Optional[str] = None
    domain: Optional[str] = None
    redirectUrl: Optional[str] = None
    turnstileResponse: Optional[str] = None


class LinkRead(BaseModel):
    id: int
    path: str
    domain: str
    redirect_url: str

    class Config:
        from_attributes = True
