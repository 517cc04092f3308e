"""
Request schemas for the HTTP surface.

Field names follow the camelCase wire format; Python attributes stay
snake_case.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import ResolutionRequest


class ResolveCommandInput(BaseModel):
    """Payload of POST /live-count/resolve."""
    model_config = ConfigDict(populate_by_name=True)

    transcript: Optional[str] = Field("", description="Primary speech-to-text hypothesis")
    alternatives: List[str] = Field(
        default_factory=list,
        max_length=3,
        description="Secondary hypotheses, most confident first",
    )
    canonical_items: List[str] = Field(
        ...,
        alias="canonicalItems",
        min_length=1,
        description="Authoritative item names",
    )
    alias_table: Dict[str, Any] = Field(
        default_factory=dict,
        alias="aliasTable",
        description="Canonical item -> learned aliases",
    )
    allow_alias_auto_save: Optional[bool] = Field(
        None,
        alias="allowAliasAutoSave",
        description="Whether an alias recommendation may be returned",
    )
    recent_context: Optional[str] = Field(None, alias="recentContext")

    def to_request(self, default_auto_save: bool = False) -> ResolutionRequest:
        allow = self.allow_alias_auto_save
        return ResolutionRequest(
            transcript=self.transcript or "",
            canonical_items=list(self.canonical_items),
            alternatives=list(self.alternatives),
            alias_table=dict(self.alias_table),
            recent_context=self.recent_context,
            allow_alias_auto_save=default_auto_save if allow is None else allow,
        )


class AlignItemsInput(BaseModel):
    """Payload of POST /live-count/align."""
    model_config = ConfigDict(populate_by_name=True)

    scanned_items: List[str] = Field(..., alias="scannedItems")
    master_list: List[str] = Field(..., alias="masterList", min_length=1)
