"""Nested site documents exchanged over the API.

Field names are camelCase on the wire and snake_case in Python. The linkage
columns (``site_id`` on groups, ``group_id`` on clocks) are storage details
and never part of a document.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from siteclocks.models.clock import DEFAULT_CLOCK_COLOR


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class ClockDocument(_Document):
    """A single clock inside a group."""

    id: str = Field(..., min_length=1)
    title: str
    total_segments: int = Field(..., alias="totalSegments", ge=0)
    filled_segments: int = Field(..., alias="filledSegments")
    color: str = DEFAULT_CLOCK_COLOR


class GroupDocument(_Document):
    """A titled group of clocks."""

    id: str = Field(..., min_length=1)
    title: str
    clocks: list[ClockDocument] = Field(default_factory=list)


class SiteDocument(_Document):
    """A site together with all of its groups and clocks."""

    id: str
    name: str
    clock_groups: list[GroupDocument] = Field(default_factory=list, alias="clockGroups")


class SiteSubmission(SiteDocument):
    """Document accepted by ``POST /data``.

    The id is optional here so a missing id can be reported as a bad request
    by the reconciler rather than as a schema error.
    """

    id: str | None = None  # type: ignore[assignment]


class SiteSummary(_Document):
    """Site listing entry without nested data."""

    id: str
    name: str
