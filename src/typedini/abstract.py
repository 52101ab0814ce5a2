# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2026/10/19
# @Author : typedini maintainers

from abc import ABCMeta, abstractmethod
from os import PathLike, fspath


class FileHandler[T](metaclass=ABCMeta):
    """Read-only handler bound to a single file on disk."""

    def __init__(self, filename: str | PathLike[str]) -> None:
        self._fn = fspath(filename)

    @abstractmethod
    def read(self) -> T | None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
