"""
Streaming XML tokenizer.

Wraps expat and turns its callbacks into a flat stream of events. Every
element event keeps the byte offsets of its tag in the source so callers can
slice out the source text without re-encoding it.
"""

from enum import Enum
from typing import Any, Iterator, Optional, Union
from xml.parsers import expat

from cot_proto.errors import MissingFieldError, TokenizationError

DEFAULT_CHUNK_SIZE = 64 * 1024
_UTF8_BOM = b"\xef\xbb\xbf"


class XmlEventKind(str, Enum):
    START = "start"
    END = "end"
    EMPTY = "empty"  # self-closing element
    TEXT = "text"
    EOF = "eof"


class XmlEvent:
    __slots__ = ("kind", "name", "attrs", "depth", "raw", "begin", "end")

    def __init__(self, kind: XmlEventKind, name: str = "", attrs: Optional[dict[str, str]] = None,
                 depth: int = 0, raw: str = "", begin: int = -1, end: int = -1):
        self.kind = kind
        self.name = name
        self.attrs = attrs or {}
        self.depth = depth
        self.raw = raw
        self.begin = begin
        self.end = end

    def __repr__(self) -> str:
        return f"XmlEvent(kind={self.kind.value!r}, name={self.name!r}, depth={self.depth})"


def prepare_source(source: Union[str, bytes]) -> bytes:
    """Encode to UTF-8 and drop a BOM or whitespace ahead of the XML declaration."""
    data = source.encode("utf-8") if isinstance(source, str) else bytes(source)
    if data.startswith(_UTF8_BOM):
        data = data[len(_UTF8_BOM):]
    return data.lstrip()


def _tag_end(data: bytes, begin: int) -> int:
    """Offset just past the `>` closing the tag that starts at `begin`."""
    quote = 0
    for index in range(begin, len(data)):
        byte = data[index]
        if quote:
            if byte == quote:
                quote = 0
        elif byte in (0x22, 0x27):  # " '
            quote = byte
        elif byte == 0x3E:  # >
            return index + 1
    raise TokenizationError("unterminated tag", {"offset": begin})


class XmlTokenizer:
    """Iterate the events of one XML document.

    A fresh expat parser is created per iteration, so the same tokenizer can
    be iterated more than once. Malformed input raises `TokenizationError`.
    """

    def __init__(self, source: Union[str, bytes], chunk_size: int = DEFAULT_CHUNK_SIZE):
        self._data = prepare_source(source)
        self._chunk_size = max(1, chunk_size)

    def slice(self, begin: int, end: int) -> str:
        return self._data[begin:end].decode("utf-8")

    def __iter__(self) -> Iterator[XmlEvent]:
        data = self._data
        parser = expat.ParserCreate()
        parser.buffer_text = True
        parser.ordered_attributes = True
        pending: list[XmlEvent] = []
        # One entry per open element: True when it was self-closing.
        stack: list[bool] = []

        def on_start(name: str, attr_list: list[str]) -> None:
            attrs = dict(zip(attr_list[::2], attr_list[1::2]))
            begin = parser.CurrentByteIndex
            end = _tag_end(data, begin)
            empty = data[end - 2:end] == b"/>"
            kind = XmlEventKind.EMPTY if empty else XmlEventKind.START
            pending.append(XmlEvent(kind, name, attrs, len(stack), self.slice(begin, end), begin, end))
            stack.append(empty)

        def on_end(name: str) -> None:
            if stack.pop():
                return
            begin = parser.CurrentByteIndex
            end = _tag_end(data, begin)
            pending.append(XmlEvent(XmlEventKind.END, name, None, len(stack), self.slice(begin, end), begin, end))

        def on_text(text: str) -> None:
            pending.append(XmlEvent(XmlEventKind.TEXT, raw=text, depth=len(stack)))

        parser.StartElementHandler = on_start
        parser.EndElementHandler = on_end
        parser.CharacterDataHandler = on_text

        offset = 0
        while True:
            chunk = data[offset:offset + self._chunk_size]
            offset += len(chunk)
            final = offset >= len(data)
            self._feed(parser, chunk, final)
            yield from pending
            pending.clear()
            if final:
                break
        yield XmlEvent(XmlEventKind.EOF)

    @staticmethod
    def _feed(parser: Any, chunk: bytes, final: bool) -> None:
        try:
            parser.Parse(chunk, final)
        except expat.ExpatError as err:
            raise TokenizationError(
                f"malformed XML: {expat.ErrorString(err.code)} at line {err.lineno}, column {err.offset}",
                {"line": err.lineno, "column": err.offset},
            ) from err
        except UnicodeDecodeError as err:
            raise TokenizationError(f"invalid UTF-8 in element text: {err}") from err


def first_element_attr(source: Union[str, bytes], element: str, attr: str) -> Optional[str]:
    """Value of `attr` on the first `element` tag that carries it, if any."""
    for event in XmlTokenizer(source):
        if event.kind in (XmlEventKind.START, XmlEventKind.EMPTY) and event.name == element:
            if attr in event.attrs:
                return event.attrs[attr]
    return None


def read_event_type(source: Union[str, bytes]) -> str:
    """Read the `type` attribute of `<event>` without decoding the message."""
    value = first_element_attr(source, "event", "type")
    if value is None:
        raise MissingFieldError("type", "no element 'event' with attribute 'type'")
    return value


def namespace_declarations(source: Union[str, bytes]) -> dict[str, str]:
    """Namespace prefixes declared on `<event>` and on the `<detail>` under it.

    Keys are the attribute names as written, e.g. `xmlns:x`.
    """
    declarations: dict[str, str] = {}
    for event in XmlTokenizer(source):
        if event.kind not in (XmlEventKind.START, XmlEventKind.EMPTY):
            continue
        if event.depth == 0 or (event.depth == 1 and event.name == "detail"):
            for name, value in event.attrs.items():
                if name.startswith("xmlns:"):
                    declarations.setdefault(name, value)
    return declarations
