# -*- encoding: utf-8 -*-
# @File   : decoders.py
# @Time   : 2026/10/19
# @Author : typedini maintainers

"""Value conversions: the built-in ones, plus a registry for the rest.

A decoder is any callable shaped like

    def decode(doc: IniDocument, raw: str) -> tuple[object, bool]: ...

returning the converted value and whether the conversion worked.
"""

import logging
from struct import error as StructError
from struct import pack, unpack
from typing import TYPE_CHECKING, Any, Callable, Hashable, Iterator

from .consts import DECIMAL_INT, TRUTHY, NativeType

if TYPE_CHECKING:
    from .model import IniDocument

__all__ = ['Decoder', 'DecoderRegistry', 'convert_native']

logger = logging.getLogger(__name__)

Decoder = Callable[['IniDocument', str], tuple[Any, bool]]


class DecoderRegistry:
    """Type identity -> decoder pairs, kept in registration order.

    Lookup is a linear scan; a program rarely has more than a handful
    of custom types.
    """
    def __init__(self) -> None:
        self.__entries: list[tuple[Hashable, Decoder]] = []

    def __index(self, type_id: Hashable) -> int:
        for idx, (tid, _) in enumerate(self.__entries):
            if tid == type_id:
                return idx
        return -1

    def register(
        self, type_id: Hashable, decoder: Decoder, overwrite: bool = True
    ) -> bool:
        """Add (or replace in place) the decoder for `type_id`.

        Returns `False` and changes nothing if `type_id` is taken
        while `overwrite` is off.
        """
        idx = self.__index(type_id)
        if idx < 0:
            self.__entries.append((type_id, decoder))
            return True
        if not overwrite:
            logger.warning(
                'decoder for %r already registered, keeping the old one.',
                type_id)
            return False
        logger.debug('decoder for %r got replaced.', type_id)
        self.__entries[idx] = (type_id, decoder)
        return True

    def unregister(self, type_id: Hashable) -> bool:
        idx = self.__index(type_id)
        if idx < 0:
            return False
        del self.__entries[idx]
        return True

    def find(self, type_id: Hashable) -> Decoder | None:
        idx = self.__index(type_id)
        return None if idx < 0 else self.__entries[idx][1]

    def clear(self) -> None:
        self.__entries.clear()

    def __contains__(self, type_id: object) -> bool:
        return self.__index(type_id) >= 0

    def __len__(self) -> int:
        return len(self.__entries)

    def __iter__(self) -> Iterator[Hashable]:
        return iter([tid for tid, _ in self.__entries])

    def __repr__(self) -> str:
        return 'DecoderRegistry { .cnt = %d }' % len(self.__entries)


def _to_int(raw: str, signed: bool = True) -> tuple[int | None, bool]:
    # int() alone would accept '1_000' and ' 1 '.
    if DECIMAL_INT.fullmatch(raw) is None:
        return None, False
    if not signed and raw[0] == '-':
        return None, False
    return int(raw), True


def _to_float(raw: str) -> tuple[float | None, bool]:
    # float() alone would accept '1_000' and ' 1 '.
    if '_' in raw or raw != raw.strip():
        return None, False
    try:
        return float(raw), True
    except ValueError:
        return None, False


def _to_float32(raw: str) -> tuple[float | None, bool]:
    val, ok = _to_float(raw)
    if not ok:
        return None, False
    try:
        return unpack('<f', pack('<f', val))[0], True
    except (OverflowError, StructError):
        return None, False


def convert_native(target: NativeType, raw: str) -> tuple[Any, bool]:
    """Convert `raw` into one of the built-in types.

    Numeric text that does not parse gives `(None, False)`;
    booleans never fail.
    """
    match target:
        case NativeType.STRING:
            return raw, True
        case NativeType.SIGNED_INT:
            return _to_int(raw)
        case NativeType.UNSIGNED_INT:
            return _to_int(raw, signed=False)
        case NativeType.FLOAT32:
            return _to_float32(raw)
        case NativeType.FLOAT64:
            return _to_float(raw)
        case NativeType.BOOL:
            return raw in TRUTHY, True
    raise ValueError(f'not a native type: {target!r}')
