# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/19
# @Author : typedini maintainers

"""Note: This package is **read-only**, there is no INI writer.

Line rules, applied after stripping surrounding whitespace:

1. Blank lines, and lines starting with `#` or `;`, are skipped.
2. `[name]` switches the current section (`name` is taken verbatim).
3. A line with exactly ONE `=` is a `key=value` pair. Neither side gets
stripped again, so `a = b` stores `'a '` -> `' b'`.
4. Anything else is silently dropped.

`\\n`, `\\r\\n` and a lone `\\r` all end a line.
"""

import codecs
import logging
from io import TextIOBase
from os import PathLike

import chardet

from ..abstract import FileHandler
from .consts import (
    ASSIGN,
    CHARDET_CONFIDENCE,
    COMMENT_PREFIXES,
    DEFAULT_SECTION,
    FALLBACK_ENCODING,
    LINE_BREAK,
)
from .decoders import DecoderRegistry
from .model import IniDocument

__all__ = ['IniParser', 'parse', 'decode_bytes']

logger = logging.getLogger(__name__)


def decode_bytes(raw: bytes, encoding: str | None = None) -> str:
    """Turn raw file content into text.

    With `encoding` given, just decode (errors propagate).
    Otherwise try UTF-8 (BOM aware), then ask `chardet`,
    and finally fall back to `FALLBACK_ENCODING`.
    """
    if encoding is not None:
        return raw.decode(encoding)
    if raw.startswith(codecs.BOM_UTF8):
        return raw.decode('utf-8-sig')
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError:
        pass

    codec = chardet.detect(raw)
    guess = codec.get('encoding')
    if guess is None or (codec.get('confidence') or 0) < CHARDET_CONFIDENCE:
        logger.debug('unsure about codec (%r), using %s.',
                     codec, FALLBACK_ENCODING)
        guess = FALLBACK_ENCODING
    # fallbacks
    try:
        return raw.decode(guess)
    except (UnicodeDecodeError, LookupError):
        return raw.decode(FALLBACK_ENCODING)


class IniParser(FileHandler[IniDocument]):
    def __init__(
        self, rootfile: str | PathLike[str],
        encoding: str | None = None,
        decoders: DecoderRegistry | None = None
    ) -> None:
        super().__init__(rootfile)
        self._codec = encoding
        self._decoders = decoders

    @staticmethod
    def parse_text(
        text: str, decoders: DecoderRegistry | None = None
    ) -> IniDocument:
        """Parse already decoded text. Never fails."""
        ret = IniDocument(text, decoders)
        this_sect = DEFAULT_SECTION
        skipped = 0
        for lineno, i in enumerate(LINE_BREAK.split(text), 1):
            i = i.strip()
            if not i or i[0] in COMMENT_PREFIXES:
                continue
            if i[0] == '[' and i[-1] == ']':
                this_sect = i[1:-1]
            elif i.count(ASSIGN) == 1:
                key, val = i.split(ASSIGN)
                # table only appears with its first pair.
                ret.setdefault(this_sect)[key] = val
            else:
                skipped += 1
                logger.debug('line %d ignored: %r', lineno, i)
        if skipped:
            logger.debug('%d malformed line(s) skipped.', skipped)
        return ret

    @staticmethod
    def readstream(
        buf: TextIOBase, decoders: DecoderRegistry | None = None
    ) -> IniDocument:
        """读取解码好的字符串流。

        Open the stream with `newline=''` if `\\r` endings matter,
        otherwise python translates them before we see them.
        """
        return IniParser.parse_text(buf.read(), decoders)

    def read(self) -> IniDocument | None:
        """读取`IniParser`实例指定的文件。

        Returns `None` (and logs why) if the file cannot be read
        or decoded with the given `encoding`.
        """
        try:
            with open(self._fn, 'rb') as fp:
                raw = fp.read()
        except OSError as e:
            logger.warning('unable to read "%s":\n  %s', self._fn, e)
            return None
        return parse(raw, self._codec, self._decoders)

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"


def parse(
    data: str | bytes,
    encoding: str | None = None,
    decoders: DecoderRegistry | None = None
) -> IniDocument | None:
    """Parse INI text (or raw bytes) into an `IniDocument`.

    Only a decoding failure gives `None`; malformed lines are skipped
    and empty input yields an empty document.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        try:
            data = decode_bytes(bytes(data), encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.warning('unable to decode INI source: %s', e)
            return None
    return IniParser.parse_text(data, decoders)
