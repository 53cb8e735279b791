# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/17 11:36:52
# @Author : pyinidoc contributors

"""Codecs between `IniDocument` and its text forms.

- `IniParser`: the classic line-based INI,
  `[section]`, `key=value ; comment`, `;` full-line comments,
  and `%n` standing for a newline inside values.
- `IniXmlParser`: `Sections > Section > (name, Keys > Key > (name, value))`.
- `IniYamlParser`: a `{section: {key: value}}` mapping, keeping scalar types.

Every parser works on text streams (`readstream()`/`writestream()`);
`read()`/`write()` open the file the parser was built with.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import date, time
from decimal import Decimal
from io import StringIO
from os import PathLike, fspath
from typing import Any, TextIO, TypeAlias
from warnings import warn
from xml.dom import minidom
from xml.etree import ElementTree as et

import chardet
import yaml

from ..abstract import FileHandler
from .consts import (
    COMMENT_MARK,
    NEWLINE_ESCAPE,
    PAIRING,
    FileType,
    XmlTag,
)
from .convert import IniValue, format_value, infer_value
from .errors import InvalidArgument, InvalidIniRecord
from .model import IniDocument, IniEntry, IniSection

logger = logging.getLogger(__name__)

StrPath: TypeAlias = str | PathLike[str]


class IniParser(FileHandler[IniDocument]):
    def __init__(
        self, filename: StrPath, encoding: str = 'utf-8', *,
        keep_comments: bool = False,
        blank_lines: int = 1
    ) -> None:
        """`keep_comments` attaches inline `; comments` to their entries
        instead of dropping them; `blank_lines` goes after each section."""
        super().__init__(fspath(filename), encoding)
        self._keep_comments = keep_comments
        self._blank_lines = blank_lines

    def readstream(
        self, buf: TextIO, instance: IniDocument | None = None
    ) -> IniDocument:
        """读取解码好的字符串流。

        Keys met before any `[section]` land in the section named `''`.
        A repeated key keeps its first value.

        Raises:
            InvalidIniRecord: a line that is neither a section
                nor a `key=value` pair, or has an empty key name.
        """
        # a fresh document first, so a bad line leaves `instance` untouched.
        ret = IniDocument()
        this_sect = ''
        for lineno, i in enumerate(buf, 1):
            if i.startswith(COMMENT_MARK):
                continue
            line, _, comment = i.partition(COMMENT_MARK)
            line = line.strip()
            if not line:
                continue
            if line[0] == '[' and line[-1] == ']':
                this_sect = line[1:-1].strip()
                ret.add(this_sect)
                continue
            if PAIRING not in line:
                raise InvalidIniRecord(
                    f'"{line}" is neither a [section] nor a key=value pair.',
                    lineno)
            key, val = line.split(PAIRING, 1)
            if not (key := key.strip()):
                raise InvalidIniRecord('The key name cannot be empty!', lineno)
            # everything after the first '=', leading blanks included.
            val = val.replace(NEWLINE_ESCAPE, '\n')
            ret._add_key(
                this_sect, key, infer_value(val),
                comment.strip() if self._keep_comments else '')
        if instance is None:
            return ret
        instance.add_range(ret)
        return instance

    def writestream(self, instance: IniDocument, buf: TextIO) -> None:
        for sect in instance:
            buf.write(f'[{sect.name}]\n')
            for i in sect:
                buf.write(self.__output_entry(sect, i))
                buf.write('\n')
            buf.write('\n' * self._blank_lines)

    @staticmethod
    def __output_entry(sect: IniSection, entry: IniEntry) -> str:
        val = (format_value(entry.value)
               .replace('\r\n', NEWLINE_ESCAPE)
               .replace('\n', NEWLINE_ESCAPE))
        if COMMENT_MARK in val:
            warn(f'[{sect.name}] "{entry.name}" contains "{COMMENT_MARK}", '
                 'everything after it would be read back as a comment.')
        ret = f'{entry.name}{PAIRING}{val}'
        if entry.comment:
            ret += f' {COMMENT_MARK} {entry.comment}'
        return ret

    def _decode_file(self, raw: bytes) -> str:
        try:
            return raw.decode(self._codec)
        except UnicodeDecodeError:
            pass
        codec = chardet.detect(raw)
        if codec['encoding'] is None or codec['confidence'] < 0.8:
            logger.warning(
                f'{self._fn} is not {self._codec} and its encoding '
                'cannot be guessed, undecodable bytes are replaced.')
            return raw.decode('utf-8', errors='replace')
        logger.info(f'{self._fn} is not {self._codec}, '
                    f'decoding as {codec["encoding"]}.')
        return raw.decode(codec['encoding'])

    def read(self, instance: IniDocument | None = None) -> IniDocument:
        """读取`IniParser`实例指定的文件。

        The configured encoding (utf-8 by default) is tried first,
        then whatever `chardet` detects.
        """
        with open(self._fn, 'rb') as fp:
            raw = fp.read()
        text = self._decode_file(raw).removeprefix('\ufeff')
        return self.readstream(StringIO(text), instance)

    def __str__(self) -> str:
        return f'INI file: {self._fn} ({self._codec})'


class IniXmlParser(FileHandler[IniDocument]):
    """XML form of the document. Comments are not stored.

    Values are read back as plain strings, no type guessing is done.
    """

    def __init__(
        self, filename: StrPath, encoding: str = 'utf-8', *,
        indent: str = '  '
    ) -> None:
        super().__init__(fspath(filename), encoding)
        self._indent = indent

    @staticmethod
    def _text(elem: et.Element) -> str:
        return ''.join(elem.itertext())

    def __parse_key(self, key: et.Element) -> IniEntry:
        name: str | None = None
        value: IniValue = None
        for i in key.iter():
            if i is key:
                continue
            if i.tag.lower() == XmlTag.NAME.value:
                name = self._text(i)
            else:
                value = self._text(i)
        if not name:
            raise InvalidIniRecord(f'<{key.tag}> without a <name>.')
        return IniEntry(name=name, value=value)

    def _fromtree(
        self, root: et.Element, instance: IniDocument | None = None
    ) -> IniDocument:
        ret = IniDocument() if instance is None else instance
        # parse every section before touching `ret`.
        sections: list[IniSection] = []
        for sect in root.iter(XmlTag.SECTION.value):
            if sect is root:
                continue
            if not (children := list(sect)):
                raise InvalidIniRecord(f'<{sect.tag}> without a name element.')
            this_sect = IniSection(self._text(children[0]))
            for keys in sect.iter(XmlTag.KEYS.value):
                for key in keys:
                    this_sect.add(self.__parse_key(key))
            sections.append(this_sect)
        ret.add_range(sections)
        return ret

    def readstream(
        self, buf: TextIO, instance: IniDocument | None = None
    ) -> IniDocument:
        return self._fromtree(et.parse(buf).getroot(), instance)

    def read(self, instance: IniDocument | None = None) -> IniDocument:
        # let expat honour the declared encoding.
        return self._fromtree(et.parse(self._fn).getroot(), instance)

    @staticmethod
    def _totree(instance: IniDocument) -> et.Element:
        root = et.Element(XmlTag.ROOT.value)
        for sect in instance:
            esect = et.SubElement(root, XmlTag.SECTION.value)
            et.SubElement(esect, XmlTag.NAME.value).text = sect.name
            ekeys = et.SubElement(esect, XmlTag.KEYS.value)
            for i in sect:
                ekey = et.SubElement(ekeys, XmlTag.KEY.value)
                et.SubElement(ekey, XmlTag.NAME.value).text = i.name
                et.SubElement(ekey, XmlTag.VALUE.value).text = \
                    format_value(i.value)
        return root

    def writestream(self, instance: IniDocument, buf: TextIO) -> None:
        formatted = minidom.parseString(
            et.tostring(self._totree(instance), 'utf-8'))
        buf.write(formatted.toprettyxml(
            self._indent, encoding='utf-8').decode('utf-8'))

    def write(self, instance: IniDocument) -> None:
        """Only `utf-8` is written, whatever the parser was built with."""
        with open(self._fn, 'w', encoding='utf-8') as fp:
            self.writestream(instance, fp)

    def __str__(self) -> str:
        return f'XML file: {self._fn}'


class IniYamlParser(FileHandler[IniDocument]):
    """`{section: {key: scalar}}` in YAML.

    Unlike INI and XML, ints and floats come back as themselves.
    Decimals are written as ints when integral, floats otherwise.
    """

    @staticmethod
    def __to_yaml(value: IniValue) -> Any:
        if isinstance(value, Decimal):
            return int(value) if value == value.to_integral_value() \
                else float(value)
        return value

    @staticmethod
    def __from_yaml(section: str, key: str, value: Any) -> IniValue:
        if isinstance(value, (list, dict)):
            raise InvalidIniRecord(
                f'[{section}] "{key}" is a {type(value).__name__}, '
                'only scalars are allowed.')
        if isinstance(value, (date, time)):
            # yaml timestamps, keep them textual.
            return value.isoformat()
        return value

    def readstream(
        self, buf: TextIO, instance: IniDocument | None = None
    ) -> IniDocument:
        data = yaml.safe_load(buf)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise InvalidIniRecord(
                'The YAML document must be a mapping of sections.')
        sections: list[IniSection] = []
        for name, pairs in data.items():
            name = '' if name is None else str(name)
            if pairs is None:
                pairs = {}
            if not isinstance(pairs, dict):
                raise InvalidIniRecord(f'[{name}] must be a mapping of keys.')
            sections.append(IniSection(name, (
                IniEntry(name=str(k), value=self.__from_yaml(name, str(k), v))
                for k, v in pairs.items())))
        ret = IniDocument() if instance is None else instance
        ret.add_range(sections)
        return ret

    def writestream(self, instance: IniDocument, buf: TextIO) -> None:
        data = {
            sect.name: {i.name: self.__to_yaml(i.value) for i in sect}
            for sect in instance
        }
        yaml.safe_dump(
            data, buf,
            allow_unicode=True, sort_keys=False, default_flow_style=False)

    def __str__(self) -> str:
        return f'YAML file: {self._fn} ({self._codec})'


HANDLERS: dict[FileType, type[FileHandler[IniDocument]]] = {
    FileType.INI: IniParser,
    FileType.XML: IniXmlParser,
    FileType.YAML: IniYamlParser,
}


def get_handler(
    filename: StrPath, filetype: FileType | str,
    encoding: str = 'utf-8'
) -> FileHandler[IniDocument]:
    try:
        filetype = FileType(filetype)
    except ValueError:
        raise InvalidArgument(f'unknown file type: {filetype!r}') from None
    return HANDLERS[filetype](fspath(filename), encoding)


def load(
    path: StrPath, filetype: FileType | str = FileType.INI,
    encoding: str = 'utf-8'
) -> IniDocument:
    """Load one file into a new `IniDocument`."""
    handler = get_handler(path, filetype, encoding)
    ret = handler.read()
    logger.debug(f'loaded {len(ret)} section(s) from {handler}')
    return ret


def save(
    doc: IniDocument, path: StrPath,
    filetype: FileType | str = FileType.INI,
    encoding: str = 'utf-8'
) -> None:
    handler = get_handler(path, filetype, encoding)
    handler.write(doc)
    logger.debug(f'saved {len(doc)} section(s) to {handler}')


def merge(
    doc: IniDocument,
    source: StrPath | Iterable[StrPath] | Mapping[StrPath, FileType],
    filetype: FileType | str | None = None, *,
    encoding: str = 'utf-8'
) -> IniDocument:
    """Merge files into `doc`, in order. Keys `doc` already has are kept.

    `source` is one path, several paths (all of `filetype`),
    or a `{path: filetype}` mapping (`filetype` is then ignored).
    Each file is loaded completely before anything is merged from it.
    """
    if isinstance(source, (str, PathLike)):
        files = {source: filetype}
    elif isinstance(source, Mapping):
        files = dict(source)
    else:
        files = {i: filetype for i in source}
    for path, ftype in files.items():
        if ftype is None:
            raise InvalidArgument(f'no file type given for {fspath(path)}.')
        doc.add_range(load(path, ftype, encoding))
        logger.info(f'merged {fspath(path)} ({FileType(ftype).value})')
    return doc
