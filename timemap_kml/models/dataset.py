"""Pydantic model for a loaded KML dataset document.

Wraps the host item dicts produced by ``KmlLoader.load`` with enough
provenance to audit a load: where the items came from, when they were
loaded and how many there are.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Schema version for forward compatibility
SCHEMA_VERSION = "timemap-kml-dataset-v1"


class KmlDataset(BaseModel):
    """A loaded KML dataset.

    Attributes:
        schema_version: Dataset schema identifier.
        source: Name of the source document (file name or caller label).
        loaded_at: Load timestamp (ISO 8601, from the loader clock).
        item_count: Number of items.
        items: Host item dicts (see ``ItemRecord.to_dict``).
    """

    schema_version: str = SCHEMA_VERSION
    source: str = ""
    loaded_at: str = ""
    item_count: int = 0
    items: list[dict[str, Any]] = Field(default_factory=list)
