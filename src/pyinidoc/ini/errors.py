# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2026/10/17 10:02:11
# @Author : pyinidoc contributors

"""Exceptions raised by the INI document model and its codecs.

Index problems are reported with the builtin `IndexError`,
and I/O or XML/YAML syntax errors propagate as their own library types.
"""


class IniError(Exception):
    """Base of every error raised by `pyinidoc` itself."""
    pass


class InvalidArgument(IniError, ValueError):
    """Empty section/key names, or an unsupported conversion target."""
    pass


class EntryNotFound(IniError, KeyError):
    """Strict lookup of a section or key that does not exist."""

    # KeyError would repr() the message otherwise.
    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ''


class ConversionFailed(IniError, ValueError):
    """A stored value could not be coerced to the requested type."""
    pass


class InvalidIniRecord(IniError):
    """To record malformed lines or nodes met while decoding."""

    def __init__(self, message: str, lineno: int | None = None) -> None:
        self.lineno = lineno
        if lineno is not None:
            message = f'line {lineno}: {message}'
        super().__init__(message)
