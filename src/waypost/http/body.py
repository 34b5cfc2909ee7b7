"""Request body decoding by Content-Type.

``decode_body`` turns a JSON or URL-encoded form body into Python values.
``Request.decoded`` caches its result per request, so handlers further
down a chain can ask again without re-reading or re-parsing the body::

    value = await read_body_as_json(request)
"""

import json
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qsl

from waypost.errors import JSONParseError, UnsupportedMediaType

if TYPE_CHECKING:
    from waypost.http.request import Request

JSON_MEDIA_TYPE = "application/json"
FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"


def media_type(content_type: str | None) -> str | None:
    """The bare media type of a Content-Type value, parameters dropped.

    ``"application/json; charset=utf-8"`` -> ``"application/json"``
    """
    if content_type is None:
        return None
    return content_type.partition(";")[0].strip().lower()


def decode_form(text: str) -> dict[str, str]:
    """Decode ``&``-separated ``key=value`` pairs into a flat mapping.

    Percent-escapes and ``+`` are decoded, blank values are kept, and a
    repeated key keeps its last value.
    """
    return dict(parse_qsl(text, keep_blank_values=True))


def decode_body(content_type: str | None, raw: bytes) -> Any:
    """Decode *raw* according to *content_type*.

    - ``application/json`` is parsed as JSON
    - ``application/x-www-form-urlencoded`` becomes a ``dict[str, str]``

    Raises:
        JSONParseError: The body is declared JSON but is not valid UTF-8 JSON.
        UnsupportedMediaType: Any other (or missing) Content-Type.
    """
    kind = media_type(content_type)
    if kind == JSON_MEDIA_TYPE:
        try:
            return json.loads(raw.decode("utf-8"))
        except ValueError as exc:  # JSONDecodeError and UnicodeDecodeError
            raise JSONParseError(str(exc)) from exc
    if kind == FORM_MEDIA_TYPE:
        return decode_form(raw.decode("utf-8"))
    raise UnsupportedMediaType(content_type)


async def read_body_as_json(request: "Request") -> Any:
    """Decode the request body according to its Content-Type.

    Same as ``await request.decoded()``; raises what ``decode_body`` raises.
    """
    return await request.decoded()
