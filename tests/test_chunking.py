"""
Test suite for chunking and deduplication helpers.
"""

import math

import pytest

from batchwire.core.chunking import chunk, remove_duplicates
from batchwire.core.entries import DeleteEntry, SendEntry


# ============================================================================
# Test Chunk
# ============================================================================

class TestChunk:
    """Tests for splitting sequences into fixed-size groups."""

    @pytest.mark.parametrize("count,size", [(1, 1), (10, 3), (9, 3), (21, 2), (300, 300), (301, 300)])
    def test_chunk_shape(self, count, size):
        """Chunk count, chunk lengths and order follow the input."""
        items = list(range(count))

        chunks = chunk(items, size)

        assert len(chunks) == math.ceil(count / size)
        assert all(len(c) == size for c in chunks[:-1])
        assert 0 < len(chunks[-1]) <= size
        assert [item for c in chunks for item in c] == items

    def test_last_chunk_holds_remainder(self):
        """The last chunk carries the excess items."""
        assert chunk(["a", "b", "c", "d", "e"], 2) == [["a", "b"], ["c", "d"], ["e"]]

    def test_empty_input_yields_no_chunks(self):
        """Empty input gives zero chunks, not one empty chunk."""
        assert chunk([], 10) == []

    def test_non_positive_size_rejected(self):
        """A size of zero or less is refused."""
        with pytest.raises(ValueError):
            chunk([1, 2, 3], 0)
        with pytest.raises(ValueError):
            chunk([1, 2, 3], -1)


# ============================================================================
# Test Remove Duplicates
# ============================================================================

class TestRemoveDuplicates:
    """Tests for identity-based deduplication."""

    def test_first_occurrence_kept(self):
        """Only the first entry per id survives, in original order."""
        entries = [
            SendEntry(id="b", message_body="first b"),
            SendEntry(id="a", message_body="first a"),
            SendEntry(id="b", message_body="second b"),
            SendEntry(id="c", message_body="c"),
            SendEntry(id="a", message_body="second a"),
        ]

        unique = remove_duplicates(entries)

        assert [e.id for e in unique] == ["b", "a", "c"]
        assert unique[0].message_body == "first b"
        assert unique[1].message_body == "first a"

    def test_identical_delete_entries_collapse(self):
        """Identical delete entries collapse to one."""
        entries = [
            DeleteEntry(id="value", receipt_handle="service"),
            DeleteEntry(id="value", receipt_handle="service"),
        ]

        assert remove_duplicates(entries) == [DeleteEntry(id="value", receipt_handle="service")]

    def test_no_duplicates_unchanged(self):
        """Entries with distinct ids pass through untouched."""
        entries = [DeleteEntry(id=str(i), receipt_handle="h") for i in range(5)]

        assert remove_duplicates(entries) == entries
