"""Line source for config text.

Splits raw input into an ordered list of text lines. No grammar knowledge
lives here; the block parser consumes the result through a line cursor.
"""

from __future__ import annotations

from .errors import ConfigParseError


_UTF8_BOM = "\ufeff"


def decode_config_bytes(data: bytes | str, source: str = "<bytes>") -> str:
    """Decode UTF-8 config bytes into text, dropping a leading byte-order mark.

    Raises:
        ConfigParseError: If the payload is not valid UTF-8. The error points
            at the line containing the first invalid byte.
    """

    if isinstance(data, str):
        text = data
    else:
        try:
            text = bytes(data).decode("utf-8")
        except UnicodeDecodeError as exc:
            line = bytes(data)[: exc.start].count(b"\n") + 1
            raise ConfigParseError(
                line=line, reason="invalid UTF-8 input", source=source
            ) from exc
    if text.startswith(_UTF8_BOM):
        text = text[len(_UTF8_BOM) :]
    return text


def split_lines(data: bytes | str, source: str = "<bytes>") -> list[str]:
    """Split config input into lines without their terminators.

    Lines end at `\\n`; one trailing `\\r` per line is removed so CRLF files
    behave like LF files. A final newline does not produce an extra empty line.
    """

    text = decode_config_bytes(data, source)
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
