"""Named constants for KML loading.

Tag names are matched by local name so documents in the KML 2.2
namespace, older namespaces and no namespace all load the same way.
"""

from __future__ import annotations

# Item element kinds
PLACEMARK_TAG = "Placemark"
GROUND_OVERLAY_TAG = "GroundOverlay"

# Time declarations
TIMESTAMP_TAG = "TimeStamp"
TIMESPAN_TAG = "TimeSpan"

# Grouping elements that may carry a time declaration inherited by
# descendant items.
CONTAINER_TAGS = frozenset({"Folder", "Document"})

# Geometry kinds, in the order they are collected per item
POINT_TAG = "Point"
LINESTRING_TAG = "LineString"
POLYGON_TAG = "Polygon"
COORDINATES_TAG = "coordinates"

# Metadata block
EXTENDED_DATA_TAG = "ExtendedData"
DATA_TAG = "Data"
VALUE_TAG = "value"

# Upper bound on Folder/Document levels searched for a time declaration
DEFAULT_MAX_ANCESTOR_DEPTH = 64

# format_date precision levels
PRECISION_DATE = 1
PRECISION_MINUTES = 2
PRECISION_SECONDS = 3
DEFAULT_DATE_PRECISION = PRECISION_SECONDS
