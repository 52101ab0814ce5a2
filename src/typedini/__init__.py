# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/19
# @Author : typedini maintainers

import logging
from os import PathLike

from .ini import (
    DEFAULT_SECTION,
    ConversionError,
    Decoder,
    DecoderRegistry,
    DecoderUnavailable,
    IniDocument,
    IniLookupError,
    IniParser,
    IniSection,
    KeyNotFound,
    NativeType,
    SectionNotFound,
    parse,
)

__all__ = [
    'parse', 'load', 'DEFAULT_SECTION',
    'IniDocument', 'IniSection', 'IniParser',
    'Decoder', 'DecoderRegistry', 'NativeType',
    'IniLookupError', 'SectionNotFound', 'KeyNotFound',
    'DecoderUnavailable', 'ConversionError',
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')


def load(
    path: str | PathLike[str],
    encoding: str | None = None,
    decoders: DecoderRegistry | None = None
) -> IniDocument | None:
    """Read and parse the INI file at `path`.

    `None` means the file could not be read (the reason is logged).
    """
    return IniParser(path, encoding, decoders).read()
