from __future__ import annotations

import base64
import binascii
import hashlib
import json
import math
import re
from typing import Any, Iterable, Mapping, Optional
from urllib.parse import quote, unquote_to_bytes

from src.app.domain.errors import (
    DuplicateOperationError,
    InvalidEncodingError,
    InvalidFormatError,
    OperationNotFoundError,
)
from src.app.domain.models import ALL_CATEGORIES, Operation, OperationCategory
from src.services.operation_filter import filter_operations

# encodeURIComponent leaves these unescaped on top of letters, digits and "-_.~"
_URI_COMPONENT_SAFE = "!*'()"
_BAD_PERCENT_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_WHITESPACE_RE = re.compile(r"\s+")
_ROT13_TABLE = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz",
    "NOPQRSTUVWXYZABCDEFGHIJKLMnopqrstuvwxyzabcdefghijklm",
)


def _to_bytes(text: str) -> bytes:
    # surrogatepass keeps encoders and hashes total over every str
    return text.encode("utf-8", "surrogatepass")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _parse_float(literal: str) -> Optional[float]:
    # out-of-range literals such as 1e400 serialize as null, like JSON.stringify
    value = float(literal)
    return value if math.isfinite(value) else None


def base64_decode(text: str, params: Mapping[str, Any]) -> str:
    compact = _WHITESPACE_RE.sub("", text)
    compact += "=" * (-len(compact) % 4)
    try:
        return base64.b64decode(compact, validate=True).decode("utf-8")
    except (binascii.Error, ValueError) as exc:
        raise InvalidEncodingError("Base64", operation_id="base64-decode") from exc


def base64_encode(text: str, params: Mapping[str, Any]) -> str:
    return base64.b64encode(_to_bytes(text)).decode("ascii")


def hex_decode(text: str, params: Mapping[str, Any]) -> str:
    try:
        return bytes.fromhex(_WHITESPACE_RE.sub("", text)).decode("utf-8")
    except ValueError as exc:
        raise InvalidEncodingError("Hex", operation_id="hex-decode") from exc


def hex_encode(text: str, params: Mapping[str, Any]) -> str:
    return _to_bytes(text).hex()


def _digest(algorithm: str):
    def run(text: str, params: Mapping[str, Any]) -> str:
        return hashlib.new(algorithm, _to_bytes(text)).hexdigest()

    run.__name__ = f"{algorithm}_digest"
    return run


def rot13(text: str, params: Mapping[str, Any]) -> str:
    return text.translate(_ROT13_TABLE)


def url_encode(text: str, params: Mapping[str, Any]) -> str:
    return quote(text, safe=_URI_COMPONENT_SAFE, encoding="utf-8", errors="surrogatepass")


def url_decode(text: str, params: Mapping[str, Any]) -> str:
    if _BAD_PERCENT_RE.search(text):
        raise InvalidEncodingError("URL-encoded", operation_id="url-decode")
    try:
        return unquote_to_bytes(text).decode("utf-8")
    except UnicodeError as exc:
        raise InvalidEncodingError("URL-encoded", operation_id="url-decode") from exc


def json_prettify(text: str, params: Mapping[str, Any]) -> str:
    try:
        parsed = json.loads(text, parse_constant=_reject_constant, parse_float=_parse_float)
        return json.dumps(parsed, indent=2, ensure_ascii=False, allow_nan=False)
    except (ValueError, RecursionError) as exc:
        raise InvalidFormatError("JSON", operation_id="json-prettify") from exc


def reverse(text: str, params: Mapping[str, Any]) -> str:
    return text[::-1]


def to_uppercase(text: str, params: Mapping[str, Any]) -> str:
    return text.upper()


def to_lowercase(text: str, params: Mapping[str, Any]) -> str:
    return text.lower()


OPERATIONS: tuple[Operation, ...] = (
    Operation(
        id="base64-decode",
        name="Base64 Decode",
        description="Decodes a Base64 string back to plain text.",
        category=OperationCategory.ENCODING,
        transform=base64_decode,
    ),
    Operation(
        id="base64-encode",
        name="Base64 Encode",
        description="Encodes plain text into Base64 format.",
        category=OperationCategory.ENCODING,
        transform=base64_encode,
    ),
    Operation(
        id="hex-decode",
        name="Hex Decode",
        description="Converts hexadecimal values into plain text.",
        category=OperationCategory.ENCODING,
        transform=hex_decode,
    ),
    Operation(
        id="hex-encode",
        name="Hex Encode",
        description="Converts plain text into hexadecimal format.",
        category=OperationCategory.ENCODING,
        transform=hex_encode,
    ),
    Operation(
        id="md5",
        name="MD5 Hash",
        description="Computes the MD5 message-digest of the input.",
        category=OperationCategory.HASHING,
        transform=_digest("md5"),
    ),
    Operation(
        id="sha1",
        name="SHA-1 Hash",
        description="Computes the SHA-1 hash of the input.",
        category=OperationCategory.HASHING,
        transform=_digest("sha1"),
    ),
    Operation(
        id="sha256",
        name="SHA-256 Hash",
        description="Computes the SHA-256 hash of the input.",
        category=OperationCategory.HASHING,
        transform=_digest("sha256"),
    ),
    Operation(
        id="sha512",
        name="SHA-512 Hash",
        description="Computes the SHA-512 hash of the input.",
        category=OperationCategory.HASHING,
        transform=_digest("sha512"),
    ),
    Operation(
        id="rot13",
        name="ROT13",
        description="Applies ROT13 substitution cipher.",
        category=OperationCategory.ENCRYPTION,
        transform=rot13,
    ),
    Operation(
        id="url-encode",
        name="URL Encode",
        description="Percent-encodes special characters in a URL.",
        category=OperationCategory.ENCODING,
        transform=url_encode,
    ),
    Operation(
        id="url-decode",
        name="URL Decode",
        description="Decodes percent-encoded characters.",
        category=OperationCategory.ENCODING,
        transform=url_decode,
    ),
    Operation(
        id="json-prettify",
        name="JSON Prettify",
        description="Formats a JSON string with indentation.",
        category=OperationCategory.DATA_FORMAT,
        transform=json_prettify,
    ),
    Operation(
        id="reverse",
        name="Reverse String",
        description="Reverses the order of characters.",
        category=OperationCategory.UTILS,
        transform=reverse,
    ),
    Operation(
        id="to-uppercase",
        name="To Uppercase",
        description="Converts all characters to uppercase.",
        category=OperationCategory.UTILS,
        transform=to_uppercase,
    ),
    Operation(
        id="to-lowercase",
        name="To Lowercase",
        description="Converts all characters to lowercase.",
        category=OperationCategory.UTILS,
        transform=to_lowercase,
    ),
)


class OperationRegistry:
    """
    Immutable, ordered catalog of operations.

    Declaration order is the display order and is preserved by every
    listing and filter.
    """

    def __init__(self, operations: Iterable[Operation]) -> None:
        self._operations: tuple[Operation, ...] = tuple(operations)
        index: dict[str, Operation] = {}
        for operation in self._operations:
            if operation.id in index:
                raise DuplicateOperationError(operation.id)
            index[operation.id] = operation
        self._index = index

    def __len__(self) -> int:
        return len(self._operations)

    def __contains__(self, operation_id: object) -> bool:
        return operation_id in self._index

    def list(self) -> tuple[Operation, ...]:
        return self._operations

    def lookup(self, operation_id: str) -> Optional[Operation]:
        return self._index.get(operation_id)

    def get_or_raise(self, operation_id: str) -> Operation:
        operation = self._index.get(operation_id)
        if operation is None:
            raise OperationNotFoundError(operation_id)
        return operation

    def categories(self) -> list[str]:
        return [category.value for category in OperationCategory]

    def filter(self, search_term: str = "", category: str = ALL_CATEGORIES) -> list[Operation]:
        return filter_operations(self._operations, search_term, category)


_REGISTRY = OperationRegistry(OPERATIONS)


def get_registry() -> OperationRegistry:
    return _REGISTRY
