# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2026/10/17 10:05:40
# @Author : pyinidoc contributors

from enum import Enum


class FileType(str, Enum):
    INI = 'ini'
    XML = 'xml'
    YAML = 'yaml'


COMMENT_MARK = ';'
PAIRING = '='
# newlines inside values are stored as this two-char sequence.
NEWLINE_ESCAPE = '%n'
NULL_LITERAL = 'null'


class XmlTag(str, Enum):
    ROOT = 'Sections'
    SECTION = 'Section'
    KEYS = 'Keys'
    KEY = 'Key'
    NAME = 'name'
    VALUE = 'value'
