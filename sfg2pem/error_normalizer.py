"""
Error Response Normalizer — Turn a failed response into readable error text.

The fallback chain is:

  1. The message parsed out of a resource-error document in the body
  2. The raw body text, when it cannot be parsed or carries no message
  3. The status line, when the response had no body at all

Callers decide between (1/2) and (3) before calling: they pass the body with
body_is_present=True, or the status line with body_is_present=False.

Resource-error documents are XML, e.g.

    <errors><error><code>404</code><errorDescription>Partner not found</errorDescription></error></errors>

JSON bodies with the same field names are accepted as well.
"""

import json
import logging
from typing import Any, Optional

from lxml import etree

logger = logging.getLogger(__name__)

MESSAGE_FIELDS = ("errorDescription", "description", "message", "errorMessage")

# Bodies are already-decoded text; the document's own encoding declaration is ignored
_PARSER = etree.XMLParser(encoding="utf-8", resolve_entities=False, no_network=True)


def describe_error(text: str, body_is_present: bool) -> str:
    """Return the human-readable description of a failed call.

    Never raises: any parse failure is logged and the raw text is returned.
    """
    if not body_is_present:
        return text
    try:
        message = _parse_message(text)
    except Exception as e:
        logger.warning("Could not parse error response, using raw body: %s", e)
        return text
    return message if message else text


def _parse_message(text: str) -> Optional[str]:
    stripped = text.strip()
    if stripped.startswith(("{", "[")):
        return _json_message(json.loads(stripped))

    root = etree.fromstring(stripped.encode("utf-8"), parser=_PARSER)
    for element in root.iter():
        if not isinstance(element.tag, str):
            continue
        if etree.QName(element).localname in MESSAGE_FIELDS and element.text and element.text.strip():
            return element.text.strip()
    return None


def _json_message(document: Any) -> Optional[str]:
    if isinstance(document, list):
        for item in document:
            message = _json_message(item)
            if message:
                return message
        return None
    if not isinstance(document, dict):
        return None
    for key in MESSAGE_FIELDS:
        value = document.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    if "errors" in document:
        return _json_message(document["errors"])
    return None
