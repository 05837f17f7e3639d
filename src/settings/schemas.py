from typing import Optional
from pydantic import BaseModel

from domains.schemas import DomainRead


class SettingsUpdate(BaseModel):
    turnstile_enabled: bool = False
    turnstile_site_key: Optional[str] = None
    turnstile_secret_key: Optional[str] = None
    primary_domain: Optional[str] = None


class SettingsRead(BaseModel):
    settings: dict[str, Optional[str]]
    domains: list[DomainRead]


class PublicConfig(BaseModel):
    turnstileEnabled: bool
    turnstileSiteKey: str
