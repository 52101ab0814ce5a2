# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/19
# @Author : typedini maintainers

from .consts import DEFAULT_SECTION, NativeType
from .decoders import Decoder, DecoderRegistry
from .model import (
    ConversionError,
    DecoderUnavailable,
    IniDocument,
    IniLookupError,
    IniSection,
    KeyNotFound,
    SectionNotFound,
)
from .parser import IniParser, decode_bytes, parse
