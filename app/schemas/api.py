from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.normalized import SanctionRecord


class ListResponse(BaseModel):
    success: bool = True
    data: List[SanctionRecord]
    last_updated: Optional[str] = Field(default=None, alias="lastUpdated")
    count: int
    cached: bool = Field(alias="_cached")
    warning: Optional[str] = Field(default=None, alias="_warning")

    model_config = ConfigDict(populate_by_name=True)


class SearchResponse(BaseModel):
    success: bool = True
    data: List[SanctionRecord]
    count: int
    total: int


class ConnectionResponse(BaseModel):
    success: bool = True
    message: str = "Server is running"
    last_updated: Optional[str] = Field(default=None, alias="lastUpdated")
    entry_count: int = Field(alias="entryCount")
    status: str
    last_error: Optional[str] = Field(default=None, alias="lastError")

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    message: str


class DatasetHealth(BaseModel):
    count: int
    last_updated: Optional[str] = Field(default=None, alias="lastUpdated")
    last_refresh: Optional[str] = Field(default=None, alias="lastRefresh")
    refreshing: bool

    model_config = ConfigDict(populate_by_name=True)


class HealthResponse(BaseModel):
    success: bool = True
    status: str
    datasets: Dict[str, DatasetHealth]
