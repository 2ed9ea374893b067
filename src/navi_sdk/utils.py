import re
from typing import Any

from navi_sdk.exceptions import NaviAPIError

# An address opens a struct tag: at the start, or inside a type-argument list.
_ADDRESS_RE = re.compile(r"(?:^|(?<=[<,\s]))(?:0x)?([0-9a-fA-F]{1,64})(?=::)")


def normalize_coin_type(coin_type: str) -> str:
    """
    Normalize a Move coin type so equal types compare equal.

    Addresses get a `0x` prefix and are left-padded to 64 lowercase hex
    digits; module and struct names are kept as-is.

    Example:
        >>> normalize_coin_type("0x2::sui::SUI")
        '0x0000000000000000000000000000000000000000000000000000000000000002::sui::SUI'
    """
    return _ADDRESS_RE.sub(lambda m: "0x" + m.group(1).lower().zfill(64), coin_type.strip())


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def camelize(obj: Any) -> Any:
    """Recursively convert snake_case dict keys to camelCase."""
    if isinstance(obj, list):
        return [camelize(item) for item in obj]
    if isinstance(obj, dict):
        return {_camel(key) if isinstance(key, str) else key: camelize(value) for key, value in obj.items()}
    return obj


def unwrap_data(body: Any, path: str) -> Any:
    """Return the `data` member of an API envelope."""
    if not isinstance(body, dict) or "data" not in body:
        raise NaviAPIError(f"Malformed response from {path}: missing 'data'", details=body)
    return body["data"]
