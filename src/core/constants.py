"""Core constants used across catalog store modules.

This module centralizes file conventions, XML namespaces and defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

RECORD_FILE_PATTERN = "Record_*.xml"
RECORD_TYPE_NAME = "Record"

CSW_NAMESPACE = "http://www.opengis.net/cat/csw/2.0.2"
DC_NAMESPACE = "http://purl.org/dc/elements/1.1/"
DCT_NAMESPACE = "http://purl.org/dc/terms/"
OWS_NAMESPACE = "http://www.opengis.net/ows"

LOAD_POLICY_ABORT = "abort"
LOAD_POLICY_SKIP = "skip"
SUPPORTED_LOAD_POLICIES = (LOAD_POLICY_ABORT, LOAD_POLICY_SKIP)
DEFAULT_LOAD_POLICY = LOAD_POLICY_ABORT
DEFAULT_LONGITUDE_FIRST = True

DEFAULT_CRS = "EPSG:4326"
SIMPLE_LITERAL_VALUE = "value"
SIMPLE_LITERAL_SCHEME = "scheme"
URN_UUID_PATTERN = (
    r"urn:uuid:[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}"
)
