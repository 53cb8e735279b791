# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/17 10:48:26
# @Author : pyinidoc contributors

"""
Basically INI Structure: ordered sections of ordered, typed key-value entries.

Two kinds of lookup live side by side, on purpose:
- `get_or_create()` (also `doc[name]`, `section[name]`) creates what is missing;
- `get_section()`, `get_key()`, `get_keys()` raise `EntryNotFound` instead.

Reading and writing files is left to `ini.parser`.
"""

from collections.abc import Collection, Iterable, Iterator, Mapping
from dataclasses import dataclass, replace
from typing import Any, TypeVar, overload
from warnings import warn

from .consts import FileType
from .convert import IniValue, change_type, format_value
from .errors import EntryNotFound, InvalidArgument

T = TypeVar('T')


@dataclass(kw_only=True)
class IniEntry:
    name: str
    value: IniValue = ''
    comment: str = ''

    def __str__(self) -> str:
        ret = f'{self.name}: {format_value(self.value)}'
        if self.comment.strip():
            ret += f' ;{self.comment}'
        return ret


class IniSection(Collection[IniEntry]):
    """INI 小节：按插入顺序保存的、键名不重复的词条表。

    Entries can be reached by position (`section[0]`)
    or by name (`section['key']`, which creates a blank entry when missing).
    """

    def __init__(
        self, name: str = '', entries: Iterable[IniEntry] = ()
    ) -> None:
        self.name = name
        self._entries: list[IniEntry] = []
        for i in entries:
            self.add(i)

    def _find(self, name: str) -> int:
        for idx, i in enumerate(self._entries):
            if i.name == name:
                return idx
        return -1

    def _lookup(self, name: str) -> IniEntry | None:
        idx = self._find(name)
        return None if idx < 0 else self._entries[idx]

    def get_or_create(self, name: str) -> IniEntry:
        """Get entry `name`, appending an empty-string one if absent."""
        if (ret := self._lookup(name)) is None:
            ret = IniEntry(name=name)
            self._entries.append(ret)
        return ret

    def set(self, name: str, entry: IniEntry) -> None:
        """Replace entry `name` at the same position, or append `entry`."""
        idx = self._find(name)
        if (other := self._find(entry.name)) >= 0 and other != idx:
            raise InvalidArgument(
                f'[{self.name}] already has a key named "{entry.name}".')
        if idx < 0:
            self._entries.append(entry)
        else:
            self._entries[idx] = entry

    @overload
    def __getitem__(self, key: int) -> IniEntry: ...
    @overload
    def __getitem__(self, key: str) -> IniEntry: ...

    def __getitem__(self, key: int | str) -> IniEntry:
        if isinstance(key, str):
            return self.get_or_create(key)
        return self._entries[key]

    def __setitem__(self, key: int | str, entry: IniEntry) -> None:
        if isinstance(key, str):
            self.set(key, entry)
            return
        other = self._find(entry.name)
        if other >= 0 and other != key % len(self._entries):
            raise InvalidArgument(
                f'[{self.name}] already has a key named "{entry.name}".')
        self._entries[key] = entry

    def __delitem__(self, index: int) -> None:
        self.remove_at(index)

    def insert(self, index: int, entry: IniEntry) -> None:
        """Insert before `index`. Silently ignored unless `index` is
        an existing position, so it can never append."""
        if -1 < index <= len(self._entries) - 1:
            self._entries.insert(index, entry)

    def remove_at(self, index: int) -> None:
        if not -1 < index <= len(self._entries) - 1:
            raise IndexError(f'[{self.name}] has no key at {index}.')
        del self._entries[index]

    def add(self, entry: IniEntry) -> None:
        """Append `entry` unless an equal one is already here.

        Only equal entries (same name, value and comment) are skipped.
        Use `IniDocument.add(section, key, value)` for name-based dedup.
        """
        if entry not in self._entries:
            self._entries.append(entry)

    def remove(self, entry: IniEntry) -> bool:
        try:
            self._entries.remove(entry)
        except ValueError:
            return False
        return True

    def contains(self, entry: IniEntry) -> bool:
        return entry in self._entries

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return self._find(item) >= 0
        return item in self._entries

    def index_of(self, entry: IniEntry) -> int:
        try:
            return self._entries.index(entry)
        except ValueError:
            return -1

    @property
    def count(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    # iterate a snapshot, so callers may mutate while looping.
    def __iter__(self) -> Iterator[IniEntry]:
        return iter(list(self._entries))

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> list[str]:
        return [i.name for i in self._entries]

    def __str__(self) -> str:
        return f'Section: {self.name}\nKey Count: {len(self)}'

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self.name, len(self._entries))


class IniDocument(Collection[IniSection]):
    """INI 文件表示：按插入顺序保存的、名称不重复的小节表。

    Build it empty, from section names, from `IniSection`s,
    or with `IniDocument.from_file()`.

    Note that `add()` never overwrites: adding a section that already exists
    merges in only the keys it lacks, and adding an existing key is ignored.
    Use `set_key_value()` to overwrite.
    """

    def __init__(self, sections: Iterable[IniSection | str] = ()) -> None:
        self._sections: list[IniSection] = []
        for i in sections:
            self.add(i)

    @classmethod
    def from_file(
        cls, path: str, filetype: FileType = FileType.INI,
        encoding: str = 'utf-8'
    ) -> 'IniDocument':
        from .parser import load
        return load(path, filetype, encoding)

    def _find(self, name: str) -> int:
        for idx, i in enumerate(self._sections):
            if i.name == name:
                return idx
        return -1

    def _lookup(self, name: str) -> IniSection | None:
        idx = self._find(name)
        return None if idx < 0 else self._sections[idx]

    def _lookup_key(self, section: str, key: str) -> IniEntry | None:
        if (sect := self._lookup(section)) is None:
            return None
        return sect._lookup(key)

    # ---- indexers ----

    def get_or_create(self, name: str) -> IniSection:
        """Get section `name`, appending an empty one if absent."""
        if (ret := self._lookup(name)) is None:
            ret = IniSection(name)
            self._sections.append(ret)
        return ret

    @overload
    def __getitem__(self, key: int) -> IniSection: ...
    @overload
    def __getitem__(self, key: str) -> IniSection: ...

    def __getitem__(self, key: int | str) -> IniSection:
        if isinstance(key, str):
            return self.get_or_create(key)
        return self._sections[key]

    def __setitem__(self, key: int | str, section: IniSection) -> None:
        """`doc[index] = s` replaces by position;
        `doc[name] = s` replaces section `name` and does nothing if absent."""
        if isinstance(key, str):
            if (idx := self._find(key)) < 0:
                return
            if (other := self._find(section.name)) >= 0 and other != idx:
                raise InvalidArgument(
                    f'section [{section.name}] already exists.')
            self._sections[idx] = section
            return
        other = self._find(section.name)
        if other >= 0 and other != key % len(self._sections):
            raise InvalidArgument(
                f'section [{section.name}] already exists.')
        self._sections[key] = section

    def __delitem__(self, key: int | str) -> None:
        if isinstance(key, str):
            if not self.remove(key):
                raise EntryNotFound(f'section [{key}] does not exist.')
            return
        self.remove_at(key)

    # ---- add ----

    @overload
    def add(self, section: IniSection) -> None: ...
    @overload
    def add(self, section: str) -> None: ...
    @overload
    def add(self, section: str, key: str, value: IniValue = '') -> None: ...

    def add(
        self, section: IniSection | str,
        key: str | None = None, value: IniValue = ''
    ) -> None:
        """Add a section, a section by name, or a key.

        - `add(IniSection)`: append it, or if a section of that name exists,
          copy over the entries whose names it does not have yet.
        - `add(name)`: create an empty section if absent.
        - `add(name, key, value)`: first write wins, an existing key is kept.

        Raises:
            InvalidArgument: an empty section or key name in the 3-arg form.
        """
        if isinstance(section, IniSection):
            self._merge_section(section)
        elif key is None:
            if self._find(section) < 0:
                self._sections.append(IniSection(section))
        else:
            if not section:
                raise InvalidArgument('The section name cannot be empty!')
            if not key:
                raise InvalidArgument('The key name cannot be empty!')
            self._add_key(section, key, value)

    def _add_key(
        self, section: str, key: str, value: IniValue, comment: str = ''
    ) -> None:
        # no name validation here: parsers may fill the '' section.
        sect = self.get_or_create(section)
        if key not in sect:
            sect._entries.append(
                IniEntry(name=key, value=value, comment=comment))

    def _merge_section(self, section: IniSection) -> None:
        if (mine := self._lookup(section.name)) is None:
            self._sections.append(section)
            return
        for i in section._entries:
            if i.name not in mine:
                mine._entries.append(replace(i))

    def add_range(
        self,
        items: Iterable[IniSection | str] | str,
        keys: (Iterable[IniEntry | tuple[str, IniValue]]
               | Mapping[str, IniValue] | None) = None
    ) -> None:
        """Bulk `add()`.

        - `add_range(['A', 'B'])` or `add_range([sect_a, sect_b])`;
        - `add_range('A', [entry, ('k', v), ...])` or
          `add_range('A', {'k': v})` to add keys into section `A`.
        """
        if keys is None:
            if isinstance(items, str):
                raise InvalidArgument(
                    'add_range() takes section names in an iterable, '
                    f'not a single string "{items}".')
            for i in items:
                self.add(i)
            return
        if not isinstance(items, str):
            raise InvalidArgument('keys must be added into a named section.')
        if isinstance(keys, Mapping):
            keys = keys.items()
        for i in keys:
            if isinstance(i, IniEntry):
                self.add(items, i.name, i.value)
            else:
                k, v = i
                self.add(items, k, v)

    def insert(self, index: int, section: IniSection) -> None:
        """Insert `section` before `index`; dropped if the name exists."""
        if self._find(section.name) >= 0:
            return
        if not -1 < index <= len(self._sections):
            raise IndexError(f'cannot insert a section at {index}.')
        self._sections.insert(index, section)

    def insert_key(
        self, index: int, section: str, key: str, value: IniValue
    ) -> None:
        """Insert a new one-key section `section` before `index`."""
        self.insert(index, IniSection(section, [IniEntry(name=key, value=value)]))

    # ---- remove ----

    @overload
    def remove(self, section: IniSection) -> bool: ...
    @overload
    def remove(self, section: str, key: str | None = None) -> bool: ...

    def remove(self, section: IniSection | str, key: str | None = None) -> bool:
        """Remove a section (by name), or one key of it.
        Returns whether anything was removed."""
        if isinstance(section, IniSection):
            section = section.name
        if (idx := self._find(section)) < 0:
            return False
        if key is None:
            del self._sections[idx]
            return True
        sect = self._sections[idx]
        if (kidx := sect._find(key)) < 0:
            return False
        del sect._entries[kidx]
        return True

    def remove_at(self, index: int) -> None:
        if not -1 < index <= len(self._sections) - 1:
            raise IndexError('The value of index is not valid.')
        del self._sections[index]

    def clear(self) -> None:
        self._sections.clear()

    # ---- edit ----

    def set_section_name(self, section: str, new_name: str) -> None:
        if (sect := self._lookup(section)) is None or section == new_name:
            return
        if self._find(new_name) >= 0:
            warn(f'section [{new_name}] already exists, '
                 f'[{section}] is not renamed.')
            return
        sect.name = new_name

    def set_key_name(self, section: str, key: str, new_name: str) -> None:
        if (entry := self._lookup_key(section, key)) is None or key == new_name:
            return
        if new_name in self._sections[self._find(section)]:
            warn(f'[{section}] already has "{new_name}", '
                 f'"{key}" is not renamed.')
            return
        entry.name = new_name

    def set_key_value(self, section: str, key: str, value: IniValue) -> None:
        """Overwrite the value of `key`, adding it (and its section) if absent."""
        if (entry := self._lookup_key(section, key)) is None:
            self.add(section, key, value)
        else:
            entry.value = value

    # ---- exist ----

    @overload
    def contains(self, section: IniSection) -> bool: ...
    @overload
    def contains(self, section: str, key: str | None = None) -> bool: ...

    def contains(self, section: IniSection | str, key: str | None = None) -> bool:
        """Check a section name, a key inside a section,
        or whether this very `IniSection` object belongs to the document."""
        if isinstance(section, IniSection):
            return any(i is section for i in self._sections)
        if key is None:
            return self._find(section) >= 0
        return self._lookup_key(section, key) is not None

    def __contains__(self, item: object) -> bool:
        if isinstance(item, (str, IniSection)):
            return self.contains(item)
        return False

    def index_of(self, section: IniSection | str) -> int:
        if isinstance(section, str):
            return self._find(section)
        for idx, i in enumerate(self._sections):
            if i is section:
                return idx
        return -1

    # ---- retrieve ----

    def get_section(self, name: str) -> IniSection:
        """Strict lookup, unlike `doc[name]`."""
        if (ret := self._lookup(name)) is None:
            raise EntryNotFound(f'The section [{name}] does not exist!')
        return ret

    def get_key(self, section: str, key: str) -> IniEntry:
        if (ret := self._lookup_key(section, key)) is None:
            raise EntryNotFound(
                f'[{section}] "{key}" does not yield a valid key entry!')
        return ret

    def get_keys(self, section: str) -> list[IniEntry]:
        return list(self.get_section(section))

    def get_key_value(
        self, section: str, key: str, default: T,
        astype: type[T] | None = None
    ) -> T:
        """Get the value of `key` converted to `astype`,
        or the converted `default` if the key does not exist.

        `astype` defaults to the type of `default` (or `object`,
        meaning "as stored", if `default` is `None`).

        Raises:
            InvalidArgument: `astype` is not a supported conversion target.
            ConversionFailed: the value (or default) does not convert.
        """
        if astype is None:
            astype = object if default is None else type(default)
        entry = self._lookup_key(section, key)
        return change_type(default if entry is None else entry.value, astype)

    @property
    def sections(self) -> list[str]:
        return [i.name for i in self._sections]

    @property
    def count(self) -> int:
        return len(self._sections)

    def __len__(self) -> int:
        return len(self._sections)

    def __iter__(self) -> Iterator[IniSection]:
        return iter(list(self._sections))

    # ---- files ----

    def load(
        self, path: str, filetype: FileType = FileType.INI,
        encoding: str = 'utf-8'
    ) -> None:
        """Read a file into this document (same rule as `add(section)`)."""
        self.merge(path, filetype, encoding=encoding)

    def save(
        self, path: str, filetype: FileType = FileType.INI,
        encoding: str = 'utf-8'
    ) -> None:
        from .parser import save
        save(self, path, filetype, encoding)

    def merge(
        self, source: str | Iterable[str] | Mapping[str, FileType],
        filetype: FileType | None = None, *, encoding: str = 'utf-8'
    ) -> None:
        """Merge one path, several paths sharing `filetype`,
        or a `{path: filetype}` mapping. Existing keys win."""
        from .parser import merge
        merge(self, source, filetype, encoding=encoding)

    def __str__(self) -> str:
        keys = sum(len(i) for i in self._sections)
        return f'INI File:\nSection Count: {len(self)}\nKey Count: {keys}'

    def __repr__(self) -> str:
        return f'<IniDocument {self.sections!r}>'

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Plain `{section: {key: value}}` snapshot."""
        return {s.name: {i.name: i.value for i in s._entries}
                for s in self._sections}
