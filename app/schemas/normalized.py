"""Unified normalized record shared by every sanctions source"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

NOT_AVAILABLE = "N/A"
UNNAMED_ENTITY = "Unnamed Entity"


class SanctionRecord(BaseModel):
    """One sanctioned entity, flattened independently of the source schema."""

    id: str = ""
    name: str
    record_type: str = Field(default=NOT_AVAILABLE, alias="recordType")
    attributes: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def field_value(self, field: str) -> Optional[str]:
        """Resolve a search field against the top-level fields, then attributes."""
        if field == "id":
            return self.id
        if field == "name":
            return self.name
        if field == "type":
            return self.record_type
        return self.attributes.get(field)


class PersistedDataset(BaseModel):
    """On-disk layout of one dataset snapshot."""

    records: List[SanctionRecord]
    last_updated: Optional[str] = Field(default=None, alias="lastUpdated")
    count: int

    model_config = ConfigDict(populate_by_name=True)
