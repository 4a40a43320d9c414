"""
Unit tests for the IchiDictionary store.

Run with: python -m pytest test_dictionary.py
"""

import threading

import pytest
import pandas as pd

from ichi_code_mapper import IchiDictionary, DictionaryEntry, NOT_FOUND_PLACEHOLDER
from ichi_code_mapper.delimited import LenientCommaParser, QuotedCsvParser
from ichi_code_mapper.seed import ICHI_SEED_ENTRIES


@pytest.fixture
def empty_dictionary():
    """Dictionary with no seed entries"""
    return IchiDictionary(seed_entries=[])


@pytest.fixture
def seeded_dictionary():
    """Dictionary seeded from the built-in entries"""
    dictionary = IchiDictionary()
    dictionary.initialize()
    return dictionary


class TestInitialize:
    """Seeding from built-in data"""

    def test_initialize_returns_size(self):
        dictionary = IchiDictionary()
        size = dictionary.initialize()
        assert size == len({e["code"] for e in ICHI_SEED_ENTRIES})
        assert size == dictionary.size()
        assert dictionary.initialized

    def test_export_after_initialize_matches_size(self, seeded_dictionary):
        assert len(seeded_dictionary.export_all()) == seeded_dictionary.size()

    def test_seed_entries_resolvable(self, seeded_dictionary):
        first = ICHI_SEED_ENTRIES[0]
        assert seeded_dictionary.lookup(first["code"]) == first["description"]

    def test_custom_seed(self):
        dictionary = IchiDictionary(seed_entries=[("X1", "one"), DictionaryEntry("X2", "two")])
        assert dictionary.initialize() == 2
        assert dictionary.lookup("X2") == "two"

    def test_reinitialize_reapplies_seed(self):
        dictionary = IchiDictionary(seed_entries=[{"code": "X1", "description": "seed"}])
        dictionary.initialize()
        dictionary.merge_from_delimited_text("X1,runtime\nX2,extra")
        assert dictionary.initialize() == 2
        assert dictionary.lookup("X1") == "seed"


class TestMergeFromDelimitedText:
    """Bulk merge of code,description text"""

    def test_merge_then_lookup(self, empty_dictionary):
        assert empty_dictionary.merge_from_delimited_text("AAA.AA.ZZ,Assessment") == 1
        assert empty_dictionary.lookup("AAA.AA.ZZ") == "Assessment"

    def test_last_write_wins(self, empty_dictionary):
        empty_dictionary.merge_from_delimited_text("X,first")
        empty_dictionary.merge_from_delimited_text("X,second")
        assert empty_dictionary.lookup("X") == "second"
        assert empty_dictionary.size() == 1

    def test_last_write_wins_within_one_payload(self, empty_dictionary):
        assert empty_dictionary.merge_from_delimited_text("X,first\nX,second") == 2
        assert empty_dictionary.lookup("X") == "second"
        assert empty_dictionary.size() == 1

    def test_overwrites_builtin_entry(self, seeded_dictionary):
        code = ICHI_SEED_ENTRIES[0]["code"]
        size = seeded_dictionary.size()
        seeded_dictionary.merge_from_delimited_text(f"{code},replaced")
        assert seeded_dictionary.lookup(code) == "replaced"
        assert seeded_dictionary.size() == size

    def test_whitespace_trimmed(self, empty_dictionary):
        empty_dictionary.merge_from_delimited_text(" X , hello ")
        assert empty_dictionary.lookup("X") == "hello"

    def test_malformed_line_skipped(self, empty_dictionary):
        text = "A01.1,Stem one\nbroken line\nB02,Extension two"
        assert empty_dictionary.merge_from_delimited_text(text) == 2
        assert empty_dictionary.size() == 2
        assert not empty_dictionary.code_exists("broken line")

    @pytest.mark.parametrize("parser_cls", [LenientCommaParser, QuotedCsvParser])
    @pytest.mark.parametrize("text", [
        "X,one\nbroken\nZ,three",
        "broken\nX,one\nZ,three",
    ])
    def test_malformed_line_skipped_by_either_parser(self, parser_cls, text):
        dictionary = IchiDictionary(seed_entries=[], parser=parser_cls())
        assert dictionary.merge_from_delimited_text(text) == 2
        assert dictionary.size() == 2
        assert dictionary.lookup("Z") == "three"
        assert not dictionary.code_exists("broken")

    def test_empty_code_skipped(self, empty_dictionary):
        assert empty_dictionary.merge_from_delimited_text(" ,orphan\nX,ok") == 1
        assert empty_dictionary.size() == 1

    def test_empty_text_imports_nothing(self, empty_dictionary):
        assert empty_dictionary.merge_from_delimited_text("") == 0
        assert empty_dictionary.merge_from_delimited_text("\n\n  \n") == 0
        assert empty_dictionary.size() == 0

    def test_no_header_skipping(self, empty_dictionary):
        assert empty_dictionary.merge_from_delimited_text("code,description\nX,hello") == 2
        assert empty_dictionary.lookup("code") == "description"

    def test_windows_line_endings(self, empty_dictionary):
        assert empty_dictionary.merge_from_delimited_text("X,one\r\nY,two\r\n") == 2
        assert empty_dictionary.lookup("Y") == "two"

    def test_comma_in_description_is_truncated(self, empty_dictionary):
        empty_dictionary.merge_from_delimited_text("X,left, upper limb")
        assert empty_dictionary.lookup("X") == "left"

    def test_quoted_parser_keeps_commas(self):
        dictionary = IchiDictionary(seed_entries=[], parser=QuotedCsvParser())
        dictionary.merge_from_delimited_text('X,"left, upper limb"\nY,plain\n')
        assert dictionary.lookup("X") == "left, upper limb"
        assert dictionary.lookup("Y") == "plain"


class TestLookup:
    """Exact-match lookup"""

    def test_lookup_trims_input(self, empty_dictionary):
        empty_dictionary.merge_from_delimited_text("XA01,Left")
        assert empty_dictionary.lookup("  XA01\t") == "Left"

    def test_lookup_miss_returns_none(self, empty_dictionary):
        assert empty_dictionary.lookup("NOPE") is None

    def test_lookup_is_case_sensitive(self, empty_dictionary):
        empty_dictionary.merge_from_delimited_text("XA01,Left")
        assert empty_dictionary.lookup("xa01") is None

    def test_no_prefix_matching(self, empty_dictionary):
        empty_dictionary.merge_from_delimited_text("AAA.AA.ZZ,Assessment")
        assert empty_dictionary.lookup("AAA.AA") is None

    def test_get_description_placeholder(self, empty_dictionary):
        assert empty_dictionary.get_description("NOPE") == NOT_FOUND_PLACEHOLDER
        assert empty_dictionary["NOPE"] == NOT_FOUND_PLACEHOLDER
        assert empty_dictionary.get_description("NOPE", default="n/a") == "n/a"

    def test_empty_description_is_not_a_miss(self, empty_dictionary):
        empty_dictionary.merge_from_delimited_text("X,")
        assert empty_dictionary.lookup("X") == ""
        assert empty_dictionary.get_description("X") == ""

    def test_get_descriptions_batch(self, empty_dictionary):
        empty_dictionary.merge_from_delimited_text("X,one\nY,two")
        assert empty_dictionary.get_descriptions(["Y", "Z", "X"], default="?") == ["two", "?", "one"]

    def test_statistics(self, empty_dictionary):
        empty_dictionary.merge_from_delimited_text("X,one")
        empty_dictionary.lookup("X")
        empty_dictionary.lookup("X")
        empty_dictionary.lookup("Y")

        stats = empty_dictionary.get_stats()
        assert stats["lookups"] == 3
        assert stats["hits"] == 2
        assert stats["misses"] == 1
        assert stats["hit_rate"] == pytest.approx(2 / 3)
        assert stats["total_codes"] == 1

        empty_dictionary.reset_stats()
        assert empty_dictionary.get_stats()["lookups"] == 0

    def test_contains_and_len(self, empty_dictionary):
        empty_dictionary.merge_from_delimited_text("X,one")
        assert "X" in empty_dictionary
        assert "Y" not in empty_dictionary
        assert len(empty_dictionary) == 1


class TestExport:
    """Snapshot export"""

    def test_export_insertion_order(self, empty_dictionary):
        empty_dictionary.merge_from_delimited_text("B,two\nA,one\nB,again")
        assert empty_dictionary.export_all() == [
            DictionaryEntry("B", "again"),
            DictionaryEntry("A", "one"),
        ]

    def test_export_is_a_snapshot(self, empty_dictionary):
        empty_dictionary.merge_from_delimited_text("A,one")
        snapshot = empty_dictionary.export_all()
        empty_dictionary.merge_from_delimited_text("B,two")
        assert len(snapshot) == 1


class TestDataFrameImport:
    """pandas constructors"""

    def test_from_dataframe(self):
        df = pd.DataFrame({
            "code": ["XA01", " XA02 ", None],
            "description": ["Left", "Right", "Dropped"],
        })
        dictionary = IchiDictionary.from_dataframe(df, name="Test")
        assert len(dictionary) == 2
        assert dictionary.lookup("XA02") == "Right"
        assert not dictionary.initialized

    def test_from_dataframe_invalid_columns(self):
        df = pd.DataFrame({"wrong": ["X"], "description": ["d"]})
        with pytest.raises(ValueError):
            IchiDictionary.from_dataframe(df)

    def test_from_file(self, tmp_path):
        path = tmp_path / "ichi.csv"
        path.write_text('code,description\nXA01,"Left, lateral"\nXA02,Right\n', encoding="utf-8")
        dictionary = IchiDictionary.from_file(path)
        assert dictionary.name == "ichi"
        assert dictionary.lookup("XA01") == "Left, lateral"

    def test_from_file_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            IchiDictionary.from_file(tmp_path / "missing.csv")


def test_concurrent_merges_do_not_lose_updates(empty_dictionary):
    def worker(prefix):
        text = "\n".join(f"{prefix}{i},d{i}" for i in range(200))
        empty_dictionary.merge_from_delimited_text(text)

    threads = [threading.Thread(target=worker, args=(p,)) for p in "ABCD"]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert empty_dictionary.size() == 800
