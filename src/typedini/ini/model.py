# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/19
# @Author : typedini maintainers

"""
Basically INI structure plus typed access.

Every key and value is kept as the raw `str` the parser saw;
conversion only happens on `IniDocument.lookup()` (or its friends).
"""

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, Hashable, Iterator, Sequence

from .consts import DEFAULT_SECTION, PY_NATIVES, NativeType
from .decoders import Decoder, DecoderRegistry, convert_native

__all__ = [
    'IniSection', 'IniDocument',
    'IniLookupError', 'SectionNotFound', 'KeyNotFound',
    'DecoderUnavailable', 'ConversionError',
]

logger = logging.getLogger(__name__)


class IniLookupError(Exception):
    """Base of everything `IniDocument.decode()` may raise."""
    pass


class SectionNotFound(IniLookupError, KeyError):
    pass


class KeyNotFound(IniLookupError, KeyError):
    pass


class DecoderUnavailable(IniLookupError, TypeError):
    """Neither a native conversion nor a registered decoder."""
    pass


class ConversionError(IniLookupError, ValueError):
    pass


class IniSection(MutableMapping[str, str]):
    """INI 小节字典。

    Keys are case-sensitive and unique; a later assignment wins.
    """
    def __init__(self, name: str, pairs: Mapping[str, str] | None = None):
        self._name = name
        self._data: dict[str, str] = {}
        if pairs:
            self._data.update(pairs)

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __str__(self) -> str:
        return f"[{self._name}]"

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self._data))

    def to_dict(self) -> dict[str, str]:
        return self._data.copy()

    def to_type_list(self) -> Sequence[str]:
        """获取该小节的*不重复*值表。主要用于“注册表”。

        e.g. `0=GACNST` / `1=GAPOWR` gives `['GACNST', 'GAPOWR']`.
        Empty values are skipped.
        """
        ret: dict[str, None] = {}
        for i in self._data.values():
            if i:
                ret.setdefault(i, None)
        return list(ret.keys())


class IniDocument(Mapping[str, IniSection]):
    """A parsed INI file: section name -> `IniSection`.

    Pairs in front of any header belong to the `''` section,
    see also `self.header`. The document itself is read-only as a mapping;
    use `remove()` to drop single entries.

    Typed access:

        ```python
        doc.lookup('Video', 'Width', int)       # (1024, True)
        doc.lookup('Video', 'Missing', int)     # (None, False)
        doc.get_value('Width', int, section='Video')  # 1024
        ```
    """
    def __init__(
        self, source: str = '', decoders: DecoderRegistry | None = None
    ) -> None:
        self.__sections: dict[str, IniSection] = {}
        self.__decoders = DecoderRegistry() if decoders is None else decoders
        self.source = source

    @property
    def sections(self) -> dict[str, IniSection]:
        return self.__sections

    @property
    def decoders(self) -> DecoderRegistry:
        return self.__decoders

    @property
    def header(self) -> IniSection:
        """位于文件头部的，不属于任何小节的游离键值对。"""
        return self.__sections.get(
            DEFAULT_SECTION, IniSection(DEFAULT_SECTION))

    def __getitem__(self, key: str) -> IniSection:
        return self.__sections[key]

    def __contains__(self, key: object) -> bool:
        return key in self.__sections

    def __len__(self) -> int:
        return len(self.__sections)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__sections)

    def __repr__(self) -> str:
        return 'IniDocument { .sections = %d, .decoders = %d }' % (
            len(self.__sections), len(self.__decoders))

    def setdefault(self, section: str) -> IniSection:
        """Get `section`, creating an empty one first if needed."""
        if section not in self.__sections:
            self.__sections[section] = IniSection(section)
        return self.__sections[section]

    def clear(self) -> None:
        """Drop all sections, the source text and registered decoders."""
        self.__sections.clear()
        self.__decoders.clear()
        self.source = ''

    def register_decoder(
        self, type_id: Hashable, decoder: Decoder, overwrite: bool = True
    ) -> bool:
        return self.__decoders.register(type_id, decoder, overwrite)

    def _raw(self, section: str | None, key: str) -> str:
        if section is None:
            section = DEFAULT_SECTION
        if section not in self.__sections:
            raise SectionNotFound(section)
        if key not in self.__sections[section]:
            raise KeyNotFound(f'[{section}] {key}')
        return self.__sections[section][key]

    def decode(self, section: str | None, key: str, target: Any) -> Any:
        """Like `lookup()`, but tells failures apart by raising.

        Raises:
            SectionNotFound, KeyNotFound: nothing stored there.
            DecoderUnavailable: `target` is not native, no decoder either.
            ConversionError: the stored text does not convert.
        """
        raw = self._raw(section, key)

        if isinstance(target, NativeType):
            native: NativeType | None = target
        elif isinstance(target, type):
            native = PY_NATIVES.get(target)
        else:
            native = None

        if native is not None:
            val, ok = convert_native(native, raw)
        else:
            decoder = self.__decoders.find(target)
            if decoder is None:
                raise DecoderUnavailable(target)
            val, ok = decoder(self, raw)

        if not ok:
            raise ConversionError(
                f'[{section or DEFAULT_SECTION}] {key}={raw!r} '
                f'is not a valid {getattr(target, "__name__", target)}')
        return val

    def lookup(
        self, section: str | None, key: str,
        target: Any = NativeType.STRING
    ) -> tuple[Any, bool]:
        """Fetch `key` from `section`, converted into `target`.

        `target` is a `NativeType`, one of `str`, `int`, `float`, `bool`,
        or a type identity registered via `register_decoder()`.
        `section=None` means the default section.

        Returns `(value, True)` on success, otherwise `(None, False)`;
        a missing key and an unsupported type look the same here,
        use `decode()` to tell them apart.
        """
        try:
            return self.decode(section, key, target), True
        except IniLookupError as e:
            logger.debug('lookup failed: %r', e)
            return None, False

    def get_value(
        self, key: str, target: Any = None, default: Any = None, *,
        section: str = DEFAULT_SECTION
    ) -> Any:
        """`lookup()` returning `default` on failure.

        Without `target`, the type of `default` is used (`str` if there
        is no default either), e.g. `get_value('Width', default=640)`.
        """
        if target is None:
            target = str if default is None else type(default)
        val, ok = self.lookup(section, key, target)
        return val if ok else default

    def remove(self, section: str | None, key: str | None = None) -> None:
        """`remove(section, key)`, or `remove(key)` for the default section.

        `section=None` also means the default section.
        Missing section or key is fine. The section stays even if empty.
        """
        if key is None:
            section, key = DEFAULT_SECTION, section
        if section is None:
            section = DEFAULT_SECTION
        if section in self.__sections:
            self.__sections[section].pop(key, None)
