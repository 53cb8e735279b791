import pytest

from pyinidoc import (
    EntryNotFound,
    IniDocument,
    IniEntry,
    IniSection,
    InvalidArgument,
)


def test_entry_display() -> None:
    assert str(IniEntry(name='host', value='localhost')) == 'host: localhost'
    assert str(IniEntry(name='debug', value=True, comment='toggle')) == \
        'debug: true ;toggle'
    assert str(IniEntry(name='k', value=None, comment='  ')) == 'k: null'


def test_section_lookup_creates_entry() -> None:
    s = IniSection('S')
    entry = s['missing']
    assert entry.value == ''
    assert s.keys() == ['missing']
    assert s.get_or_create('missing') is entry


def test_section_set_replaces_in_place() -> None:
    s = IniSection('S', [IniEntry(name='a', value=1), IniEntry(name='b', value=2)])
    s['a'] = IniEntry(name='a', value=10)
    assert s.keys() == ['a', 'b']
    assert s[0].value == 10
    s.set('c', IniEntry(name='c', value=3))
    assert s.keys() == ['a', 'b', 'c']


def test_section_insert_and_remove_at_bounds() -> None:
    s = IniSection('S', [IniEntry(name='a')])
    s.insert(1, IniEntry(name='z'))   # not an existing position
    assert s.keys() == ['a']
    s.insert(0, IniEntry(name='b'))
    assert s.keys() == ['b', 'a']
    with pytest.raises(IndexError):
        s.remove_at(2)
    with pytest.raises(IndexError):
        s.remove_at(-1)
    s.remove_at(0)
    assert s.keys() == ['a']


def test_section_add_skips_equal_entries_only() -> None:
    s = IniSection('S')
    s.add(IniEntry(name='a', value='x'))
    s.add(IniEntry(name='a', value='x'))
    assert s.count == 1
    s.add(IniEntry(name='a', value='y'))
    assert s.count == 2
    assert s.index_of(IniEntry(name='a', value='y')) == 1
    assert s.index_of(IniEntry(name='nope')) == -1


def test_section_iteration_is_a_snapshot() -> None:
    s = IniSection('S', [IniEntry(name='a'), IniEntry(name='b')])
    seen = []
    for i in s:
        seen.append(i.name)
        s.remove(i)
    assert seen == ['a', 'b']
    assert len(s) == 0


def test_document_lookup_creates_section() -> None:
    doc = IniDocument()
    sect = doc['New']
    assert isinstance(sect, IniSection)
    assert len(sect) == 0
    assert [i.name for i in doc] == ['New']
    assert doc.contains('New')


def test_strict_lookups_raise() -> None:
    doc = IniDocument(['A'])
    with pytest.raises(EntryNotFound):
        doc.get_section('B')
    with pytest.raises(EntryNotFound):
        doc.get_key('A', 'k')
    with pytest.raises(EntryNotFound):
        doc.get_keys('B')
    assert doc.sections == ['A']


def test_add_first_write_wins_and_set_key_value_overwrites() -> None:
    doc = IniDocument()
    doc.add('S', 'K', 1)
    doc.add('S', 'K', 2)
    assert doc.get_key_value('S', 'K', 0) == 1
    doc.set_key_value('S', 'K', 2)
    assert doc.get_key_value('S', 'K', 0) == 2
    doc.set_key_value('T', 'new', 'v')
    assert doc.get_key('T', 'new').value == 'v'


def test_add_rejects_empty_names() -> None:
    doc = IniDocument()
    with pytest.raises(InvalidArgument):
        doc.add('', 'k', 1)
    with pytest.raises(InvalidArgument):
        doc.add('S', '', 1)
    assert len(doc) == 0


def test_add_section_merges_missing_keys() -> None:
    a = IniDocument()
    a.add('S', 'k1', 1)
    b = IniDocument()
    b.add('S', 'k1', 2)
    b.add('S', 'k2', 3)
    a.add(b.get_section('S'))
    assert a.get_key_value('S', 'k1', 0) == 1
    assert a.get_key_value('S', 'k2', 0) == 3
    assert a['S'].keys() == ['k1', 'k2']


def test_add_range_variants() -> None:
    doc = IniDocument()
    doc.add_range(['A', 'B', 'A'])
    assert doc.sections == ['A', 'B']
    doc.add_range([IniSection('C', [IniEntry(name='x', value=1)])])
    doc.add_range('A', {'k1': 'v1', 'k2': 'v2'})
    doc.add_range('B', [('p', 1), IniEntry(name='q', value=2)])
    assert doc.sections == ['A', 'B', 'C']
    assert doc['A'].keys() == ['k1', 'k2']
    assert doc['B'].keys() == ['p', 'q']
    with pytest.raises(InvalidArgument):
        doc.add_range('A')


def test_insert_drops_duplicate_names() -> None:
    doc = IniDocument(['A', 'B'])
    doc.insert(0, IniSection('B', [IniEntry(name='k')]))
    assert doc.sections == ['A', 'B']
    assert len(doc['B']) == 0
    doc.insert(1, IniSection('C'))
    assert doc.sections == ['A', 'C', 'B']
    doc.insert_key(0, 'D', 'k', 'v')
    assert doc.sections == ['D', 'A', 'C', 'B']
    assert doc.get_key('D', 'k').value == 'v'


def test_remove() -> None:
    doc = IniDocument()
    doc.add('S', 'k', 1)
    assert doc.remove('X') is False
    assert doc.sections == ['S']
    assert doc.remove('S', 'nope') is False
    assert doc.remove('S', 'k') is True
    assert not doc.contains('S', 'k')
    assert doc.remove('S') is True
    assert not doc.contains('S')


def test_remove_at_raises_only_when_invalid() -> None:
    doc = IniDocument(['A', 'B'])
    doc.remove_at(0)
    assert doc.sections == ['B']
    with pytest.raises(IndexError):
        doc.remove_at(1)
    with pytest.raises(IndexError):
        doc.remove_at(-1)


def test_rename() -> None:
    doc = IniDocument()
    doc.add('A', 'k', 1)
    doc.add('B', 'j', 2)
    doc.set_section_name('A', 'C')
    doc.set_section_name('missing', 'D')
    assert doc.sections == ['C', 'B']
    doc.set_key_name('C', 'k', 'kk')
    assert doc['C'].keys() == ['kk']
    with pytest.warns(UserWarning):
        doc.set_section_name('C', 'B')
    assert doc.sections == ['C', 'B']


def test_contains_and_index_of() -> None:
    sect = IniSection('S')
    doc = IniDocument([sect, 'T'])
    assert doc.contains(sect)
    assert sect in doc
    assert 'T' in doc
    assert not doc.contains(IniSection('S'))
    assert doc.index_of('T') == 1
    assert doc.index_of(sect) == 0
    assert doc.index_of('X') == -1


def test_named_setitem_is_noop_when_absent() -> None:
    doc = IniDocument(['A'])
    doc['B'] = IniSection('B')
    assert doc.sections == ['A']
    doc['A'] = IniSection('A', [IniEntry(name='k')])
    assert doc['A'].keys() == ['k']


def test_positional_setitem_keeps_names_unique() -> None:
    doc = IniDocument(['A', 'B'])
    with pytest.raises(InvalidArgument):
        doc[0] = IniSection('B')
    doc[0] = IniSection('C')
    assert doc.sections == ['C', 'B']


def test_str_counts_keys() -> None:
    doc = IniDocument()
    doc.add('A', 'k', 1)
    doc.add('A', 'j', 1)
    doc.add('B', 'k', 1)
    assert str(doc) == 'INI File:\nSection Count: 2\nKey Count: 3'
    assert str(doc['A']) == 'Section: A\nKey Count: 2'


def test_named_setitem_keeps_names_unique() -> None:
    doc = IniDocument(['A', 'B'])
    with pytest.raises(InvalidArgument):
        doc['A'] = IniSection('B')
    assert doc.sections == ['A', 'B']
    doc['A'] = IniSection('C')
    assert doc.sections == ['C', 'B']


def test_section_set_keeps_names_unique() -> None:
    s = IniSection('S', [IniEntry(name='a'), IniEntry(name='b')])
    with pytest.raises(InvalidArgument):
        s['a'] = IniEntry(name='b')
    with pytest.raises(InvalidArgument):
        s.set('new', IniEntry(name='a'))
    assert s.keys() == ['a', 'b']
    s['a'] = IniEntry(name='c')
    assert s.keys() == ['c', 'b']
