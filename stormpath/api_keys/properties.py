"""
Property bag reading and writing.

Property bags are flat ``str -> str`` mappings stored as line-oriented
``key=value`` text encoded as ISO-8859-1. The syntax follows the classic
``.properties`` format:

- blank lines and lines starting with ``#`` or ``!`` are ignored
- the key ends at the first unescaped ``=``, ``:`` or whitespace
- whitespace around the separator is ignored
- a line ending in an odd number of backslashes continues on the next line
- ``\\t``, ``\\n``, ``\\r``, ``\\f``, ``\\uXXXX`` escapes are decoded; any other
  escaped character stands for itself
- when a key repeats, the last occurrence wins
"""

import io
import re
from pathlib import Path
from typing import BinaryIO, Dict, Iterator, Mapping, TextIO, Union

ENCODING = "iso-8859-1"

_LINE_BREAKS = re.compile(r"\r\n|\r|\n")
_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_REVERSE_ESCAPES = {"\t": "\\t", "\n": "\\n", "\r": "\\r", "\f": "\\f", "\\": "\\\\"}

PropertySource = Union[str, bytes, BinaryIO, TextIO]


def load_properties(source: PropertySource) -> Dict[str, str]:
    """
    Parse a property bag.

    Args:
        source: Property text, raw bytes, a binary stream (decoded as
            ISO-8859-1) or a text stream

    Returns:
        Mapping of property names to values
    """
    if isinstance(source, bytes):
        text = source.decode(ENCODING)
    elif isinstance(source, str):
        text = source
    else:
        data = source.read()
        text = data.decode(ENCODING) if isinstance(data, bytes) else data
    return loads_properties(text)


def loads_properties(text: str) -> Dict[str, str]:
    """Parse property bag text into a mapping."""
    properties: Dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_key_value(line)
        properties[key] = value
    return properties


def _logical_lines(text: str) -> Iterator[str]:
    """Yield logical lines with comments dropped and continuations joined."""
    parts = []
    for natural in _LINE_BREAKS.split(text):
        stripped = natural.lstrip(_WHITESPACE)

        if not parts and (not stripped or stripped[0] in "#!"):
            continue

        if _continues(stripped):
            parts.append(stripped[:-1])
            continue

        parts.append(stripped)
        yield "".join(parts)
        parts = []

    # Continuation on the last line of the input
    if parts:
        yield "".join(parts)


def _continues(line: str) -> bool:
    """Check for an odd number of trailing backslashes."""
    count = len(line) - len(line.rstrip("\\"))
    return count % 2 == 1


def _split_key_value(line: str):
    key_end = len(line)
    i = 0
    while i < len(line):
        c = line[i]
        if c == "\\":
            i += 2
            continue
        if c in _SEPARATORS or c in _WHITESPACE:
            key_end = i
            break
        i += 1

    key = line[:key_end]
    rest = line[key_end:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)

    return _unescape(key), _unescape(rest)


def _unescape(value: str) -> str:
    if "\\" not in value:
        return value

    out = []
    i = 0
    while i < len(value):
        c = value[i]
        if c != "\\":
            out.append(c)
            i += 1
            continue

        i += 1
        if i >= len(value):
            break
        c = value[i]
        if c == "u":
            digits = value[i + 1:i + 5]
            if len(digits) < 4:
                raise ValueError(f"Malformed \\uXXXX escape: \\u{digits}")
            try:
                out.append(chr(int(digits, 16)))
            except ValueError:
                raise ValueError(f"Malformed \\uXXXX escape: \\u{digits}") from None
            i += 5
            continue

        out.append(_ESCAPES.get(c, c))
        i += 1

    result = "".join(out)
    if any("\ud800" <= ch <= "\udfff" for ch in result):
        # Join escaped surrogate pairs back into single characters
        result = result.encode("utf-16-be", "surrogatepass").decode("utf-16-be", "surrogatepass")
    return result


def dumps_properties(properties: Mapping[str, str]) -> str:
    """Render a mapping as property bag text."""
    lines = []
    for key, value in properties.items():
        lines.append(f"{_escape(key, is_key=True)}={_escape(value, is_key=False)}")
    return "\n".join(lines) + ("\n" if lines else "")


def dump_properties(properties: Mapping[str, str], fp: Union[BinaryIO, TextIO]) -> None:
    """Write a mapping to a stream; binary streams receive ISO-8859-1 bytes."""
    text = dumps_properties(properties)
    if isinstance(fp, (io.RawIOBase, io.BufferedIOBase)):
        fp.write(text.encode(ENCODING))
    else:
        fp.write(text)


def write_properties_file(properties: Mapping[str, str], path: Union[str, Path]) -> Path:
    """Write a mapping to a property file, creating parent directories."""
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(dumps_properties(properties).encode(ENCODING))
    return path


def _escape(value: str, is_key: bool) -> str:
    out = []
    for i, c in enumerate(value):
        if c in _REVERSE_ESCAPES:
            out.append(_REVERSE_ESCAPES[c])
        elif c == " ":
            out.append("\\ " if is_key or i == 0 else " ")
        elif c in "=:#!":
            out.append("\\" + c)
        elif ord(c) < 0x20 or ord(c) > 0x7e:
            # Surrogate pairs are written as two escapes
            for unit in _utf16_units(c):
                out.append(f"\\u{unit:04X}")
        else:
            out.append(c)
    return "".join(out)


def _utf16_units(c: str):
    data = c.encode("utf-16-be")
    return [int.from_bytes(data[i:i + 2], "big") for i in range(0, len(data), 2)]
