from __future__ import annotations

import enum, json, math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from .errors import ParseError

JsonValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]

# ------------------------------ Kinds ------------------------------
class Kind(enum.Enum):
    NULL = "null"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"

def kind_of(value: Any) -> Optional[Kind]:
    # bool first: it is an int subclass
    if value is None: return Kind.NULL
    if isinstance(value, bool): return Kind.BOOL
    if isinstance(value, int): return Kind.INT
    if isinstance(value, float): return Kind.FLOAT
    if isinstance(value, str): return Kind.STRING
    if isinstance(value, list): return Kind.ARRAY
    if isinstance(value, dict): return Kind.OBJECT
    return None

class NodeRef:
    """Handle on one slot of a list or dict; the root sits in a one-element list."""
    __slots__ = ("container", "key")

    def __init__(self, container, key):
        self.container = container
        self.key = key

    def get(self) -> Any:
        return self.container[self.key]

    def set(self, value: Any) -> None:
        self.container[self.key] = value

    def child(self, key) -> "NodeRef":
        return NodeRef(self.get(), key)

    def __repr__(self) -> str:
        return f"NodeRef({self.key!r})"

# ------------------------------ Parsing ------------------------------
def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard constant {name}")

def _finite_float(text: str) -> float:
    # 1e400 is valid JSON but overflows to inf, which cannot be written back
    val = float(text)
    if not math.isfinite(val):
        raise ValueError(f"number out of range: {text}")
    return val

def _check_strings(value: Any) -> None:
    # lone surrogate escapes ("\ud800") decode fine but do not encode to UTF-8
    if isinstance(value, str):
        value.encode("utf-8")
    elif isinstance(value, dict):
        for k, v in value.items():
            k.encode("utf-8")
            _check_strings(v)
    elif isinstance(value, list):
        for v in value:
            _check_strings(v)

def parse(data: bytes) -> JsonValue:
    """Decode UTF-8/16/32 (BOM or not) and parse strict JSON; raises ParseError.

    Only values that ``serialize`` can write back are accepted.
    """
    try:
        # bytes input makes json pick the encoding itself (json.detect_encoding)
        value = json.loads(bytes(data), parse_constant=_reject_constant, parse_float=_finite_float)
        _check_strings(value)
    except (ValueError, RecursionError) as ex:
        raise ParseError("malformed JSON") from ex
    return value

# ------------------------------ Formatting ------------------------------
@dataclass
class FormatConfig:
    indent: int = 4
    eol: str = "\n"

DEFAULT_CFG = FormatConfig()

def _dump_oneline(val: Any) -> str:
    return json.dumps(val, ensure_ascii=False, allow_nan=False, separators=(", ", ": "))

def _format_value(val: Any, cfg: FormatConfig, level: int) -> str:
    # Arrays stay on one line at any depth, objects inside them included.
    if not isinstance(val, dict) or not val:
        return _dump_oneline(val)
    indent = " " * (cfg.indent * level)
    child  = " " * (cfg.indent * (level + 1))
    lines: List[str] = []
    for k, v in val.items():
        lines.append(f"{child}{json.dumps(k, ensure_ascii=False)}: {_format_value(v, cfg, level + 1)}")
    return "{\n" + ",\n".join(lines) + "\n" + indent + "}"

def dumps(value: JsonValue, cfg: Optional[FormatConfig] = None) -> str:
    cfg = cfg or DEFAULT_CFG
    return _format_value(value, cfg, 0) + cfg.eol

def serialize(value: JsonValue, cfg: Optional[FormatConfig] = None) -> bytes:
    return dumps(value, cfg).encode("utf-8")
