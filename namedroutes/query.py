"""
Query string helpers on top of urllib.parse.
"""

from typing import Any, Dict, List, Mapping, Union
from urllib.parse import parse_qsl, quote

# Same unreserved set as JavaScript's encodeURIComponent
_COMPONENT_SAFE = "-_.!~*'()"

QueryValue = Union[str, List[str]]


def encode_component(value: Any, safe: str = "") -> str:
    """Percent-encode a single key or value.

    Characters in `safe` are kept as is, on top of the unreserved set.
    """
    if isinstance(value, bool):
        value = str(value).lower()
    return quote(str(value), safe=_COMPONENT_SAFE + safe)


def encode_query(params: Mapping[str, Any]) -> str:
    """Encode params as "k=v&k2=v2" in iteration order.

    None values are skipped; lists and tuples repeat the key.
    """
    pairs = []
    for key, value in params.items():
        if value is None:
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            pairs.append(f"{encode_component(key)}={encode_component(item)}")
    return "&".join(pairs)


def parse_query(query: str) -> Dict[str, QueryValue]:
    """Decode a query string into a dict.

    Repeated keys collect into a list; "+" decodes to a space.
    """
    result: Dict[str, QueryValue] = {}
    if not query:
        return result

    for key, value in parse_qsl(query.lstrip("?"), keep_blank_values=True):
        if key.endswith("[]"):
            key = key[:-2]
            existing = result.setdefault(key, [])
            if not isinstance(existing, list):
                existing = result[key] = [existing]
            existing.append(value)
        elif key in result:
            existing = result[key]
            if isinstance(existing, list):
                existing.append(value)
            else:
                result[key] = [existing, value]
        else:
            result[key] = value

    return result
