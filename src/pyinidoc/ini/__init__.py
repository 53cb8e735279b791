# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/17 12:10:05
# @Author : pyinidoc contributors

from .consts import FileType
from .convert import IniValue, change_type, format_value, infer_value
from .errors import (
    ConversionFailed,
    EntryNotFound,
    IniError,
    InvalidArgument,
    InvalidIniRecord
)
from .model import IniDocument, IniEntry, IniSection
from .parser import (
    IniParser,
    IniXmlParser,
    IniYamlParser,
    get_handler,
    load,
    merge,
    save
)
