"""Static marketing shell content."""

from pydantic import BaseModel


class CoreRange(BaseModel):
    label: str
    icon: str
    selector: str


class SiteContent(BaseModel):
    headline: str
    strapline: str
    mission: str
    about: str
    trade_counter: str
    core_ranges: list[CoreRange]
