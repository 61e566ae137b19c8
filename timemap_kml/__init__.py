"""Timemap KML loader.

Turns KML documents (Placemarks, GroundOverlays, Folder/Document time
declarations and ExtendedData) into the item records a timeline/map
visualization host renders.
"""

__version__ = "0.1.0"
