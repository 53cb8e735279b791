# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/17 12:11:47
# @Author : pyinidoc contributors

import logging

from .ini import (
    ConversionFailed,
    EntryNotFound,
    FileType,
    IniDocument,
    IniEntry,
    IniError,
    IniParser,
    IniSection,
    IniXmlParser,
    IniYamlParser,
    InvalidArgument,
    InvalidIniRecord,
    load,
    merge,
    save
)

__all__ = [
    'IniDocument', 'IniSection', 'IniEntry', 'FileType',
    'IniParser', 'IniXmlParser', 'IniYamlParser',
    'load', 'save', 'merge',
    'IniError', 'InvalidArgument', 'EntryNotFound',
    'ConversionFailed', 'InvalidIniRecord'
]

# applications decide where records go.
logging.getLogger(__name__).addHandler(logging.NullHandler())
