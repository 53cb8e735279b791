# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2026/10/17 10:07:02
# @Author : pyinidoc contributors

from abc import ABCMeta, abstractmethod
from typing import Generic, TextIO, TypeVar

T = TypeVar('T')


class FileHandler(Generic[T], metaclass=ABCMeta):
    """Reads a `T` from, or writes one to, the file it was built with.

    Subclasses do the real work on text streams,
    so any storage able to hand out a text stream would do.
    """

    def __init__(self, filename: str, encoding: str = 'utf-8') -> None:
        self._fn = filename
        self._codec = encoding

    @abstractmethod
    def readstream(self, buf: TextIO, instance: T | None = None) -> T:
        raise NotImplementedError

    @abstractmethod
    def writestream(self, instance: T, buf: TextIO) -> None:
        raise NotImplementedError

    def read(self, instance: T | None = None) -> T:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            return self.readstream(fp, instance)

    def write(self, instance: T) -> None:
        # plain truncate-and-write, no atomic rename.
        with open(self._fn, 'w', encoding=self._codec) as fp:
            self.writestream(instance, fp)

    def __str__(self) -> str:
        return self._fn
