from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str


class CrawlResponse(BaseModel):
    status: str
    message: str


class StatusResponse(BaseModel):
    status: str
    last_crawl: datetime | None = None
    flavors_count: int = 0
    disks_count: int = 0
    error: str | None = None
