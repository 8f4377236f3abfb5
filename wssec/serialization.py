"""
Serialization adapter for Timestamp tokens.

Two renderings are supported: a plain dict (for JSON) and the wsu:Timestamp
XML element carried inside a wsse:Security header. Both round-trip the
Created and Expires instants exactly.
"""
from typing import Any, Dict, Optional, Union
from uuid import uuid4

from lxml import etree

from wssec.errors import MalformedTimestampError
from wssec.schemas import Timestamp
from wssec.timeutil import format_instant, parse_instant

WSU_NS = "http://docs.oasis-open.org/wss/2004/01/oasis-200401-wss-wssecurity-utility-1.0.xsd"
WSSE_NS = "http://docs.oasis-open.org/wss/2004/01/oasis-200401-wss-wssecurity-secext-1.0.xsd"

TIMESTAMP_TAG = etree.QName(WSU_NS, "Timestamp")
CREATED_TAG = etree.QName(WSU_NS, "Created")
EXPIRES_TAG = etree.QName(WSU_NS, "Expires")
ID_ATTR = etree.QName(WSU_NS, "Id")

_DICT_KEYS = {"created", "expires"}

_PARSER = etree.XMLParser(resolve_entities=False, no_network=True)


def timestamp_to_dict(token: Timestamp) -> Dict[str, Any]:
    data = {"created": format_instant(token.created)}
    if token.expires is not None:
        data["expires"] = format_instant(token.expires)
    return data


def timestamp_from_dict(data: Dict[str, Any]) -> Timestamp:
    if not isinstance(data, dict):
        raise MalformedTimestampError("timestamp must be an object")
    unknown = set(data) - _DICT_KEYS
    if unknown:
        raise MalformedTimestampError(f"unknown timestamp fields: {sorted(unknown)}")
    if "created" not in data:
        raise MalformedTimestampError("timestamp has no created instant")

    expires = data.get("expires")
    return Timestamp(
        created=parse_instant(data["created"]),
        expires=parse_instant(expires) if expires is not None else None,
    )


def timestamp_to_element(token: Timestamp, wsu_id: Optional[str] = None) -> etree._Element:
    """Render the token as a wsu:Timestamp element with a wsu:Id."""
    element = etree.Element(TIMESTAMP_TAG, nsmap={"wsu": WSU_NS})
    element.set(ID_ATTR, wsu_id or f"TS-{uuid4()}")

    created = etree.SubElement(element, CREATED_TAG)
    created.text = format_instant(token.created)
    if token.expires is not None:
        expires = etree.SubElement(element, EXPIRES_TAG)
        expires.text = format_instant(token.expires)
    return element


def timestamp_from_element(element: etree._Element) -> Timestamp:
    if etree.QName(element) != TIMESTAMP_TAG:
        raise MalformedTimestampError(f"expected wsu:Timestamp, found {element.tag}")

    created_nodes = element.findall(CREATED_TAG.text)
    expires_nodes = element.findall(EXPIRES_TAG.text)
    if len(created_nodes) != 1:
        raise MalformedTimestampError("wsu:Timestamp must contain exactly one wsu:Created")
    if len(expires_nodes) > 1:
        raise MalformedTimestampError("wsu:Timestamp must contain at most one wsu:Expires")

    expires = None
    if expires_nodes:
        expires = parse_instant(expires_nodes[0].text)
    return Timestamp(created=parse_instant(created_nodes[0].text), expires=expires)


def find_timestamp_element(root: etree._Element) -> etree._Element:
    """Locate the first wsu:Timestamp in a document, including the root itself."""
    if etree.QName(root) == TIMESTAMP_TAG:
        return root
    element = root.find(f".//{TIMESTAMP_TAG.text}")
    if element is None:
        raise MalformedTimestampError("no wsu:Timestamp element found")
    return element


def loads(document: Union[bytes, str, etree._Element]) -> Timestamp:
    """Parse the timestamp carried by an XML document or element."""
    if isinstance(document, (bytes, str)):
        if isinstance(document, str):
            document = document.encode("utf-8")
        try:
            document = etree.fromstring(document, _PARSER)
        except etree.XMLSyntaxError as exc:
            raise MalformedTimestampError("document is not well-formed XML") from exc
    return timestamp_from_element(find_timestamp_element(document))


def dumps(token: Timestamp, wsu_id: Optional[str] = None) -> bytes:
    return etree.tostring(timestamp_to_element(token, wsu_id), encoding="utf-8")
