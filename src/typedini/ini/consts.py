# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2026/10/19
# @Author : typedini maintainers

from enum import Enum
from re import compile as regex


class NativeType(str, Enum):
    """Conversions `IniDocument.lookup()` performs without a decoder."""
    STRING = 'string'
    SIGNED_INT = 'int'
    UNSIGNED_INT = 'uint'
    FLOAT32 = 'float32'
    FLOAT64 = 'float64'
    BOOL = 'bool'


# python builtins accepted in place of the enum.
PY_NATIVES: dict[type, NativeType] = {
    str: NativeType.STRING,
    int: NativeType.SIGNED_INT,
    float: NativeType.FLOAT64,
    bool: NativeType.BOOL,
}

# pairs before any `[section]` live here.
DEFAULT_SECTION = ''

COMMENT_PREFIXES = ('#', ';')
ASSIGN = '='

# `\r\r` must stay two terminators, so alternation order matters.
LINE_BREAK = regex(r'\r\n|\r|\n')
DECIMAL_INT = regex(r'[+-]?[0-9]+')

TRUTHY = ('1', 'true')

# below this `chardet` guess is not trusted.
CHARDET_CONFIDENCE = 0.8
FALLBACK_ENCODING = 'latin-1'
