"""Tests for the ledger blob codec."""

import pytest

from perfume.identity.errors import PopulationExhausted
from perfume.identity.ledger import LINE_WIDTH, MAX_OFFSET, Ledger, LedgerLine
from perfume.utils.hex_string import InvalidEncoding

D1 = "5" * 61
D2 = "1" * 61
D3 = "9" * 61


class TestLedgerLine:
    """Rendering and parsing of single lines."""

    def test_render_right_justifies_offset(self):
        assert LedgerLine(digest="a" * 61, offset=9).render() == "a" * 61 + "     9"
        assert LedgerLine(digest="a" * 61, offset=12345).render() == "a" * 61 + " 12345"

    def test_parse_round_trip(self):
        line = LedgerLine(digest="0123456789abcdef" * 3 + "0123456789abc", offset=42)
        assert len(line.render()) == LINE_WIDTH
        assert LedgerLine.parse(line.render()) == line

    def test_render_rejects_offset_beyond_field(self):
        with pytest.raises(PopulationExhausted):
            LedgerLine(digest="a" * 61, offset=MAX_OFFSET + 1).render()

    @pytest.mark.parametrize(
        "raw",
        [
            "a" * 61 + "    0",  # too short
            "a" * 61 + "x    0",  # missing separator
            "a" * 61 + "    x0",  # offset not decimal
            "a" * 61 + "      ",  # empty offset
            "g" * 61 + "     0",  # digest not hex
            "A" * 61 + "     0",  # uppercase digest
        ],
    )
    def test_parse_rejects_malformed_lines(self, raw):
        with pytest.raises(InvalidEncoding):
            LedgerLine.parse(raw)


class TestLedger:
    """Whole-blob behaviour."""

    def test_missing_and_empty_blobs_are_empty(self):
        assert len(Ledger.from_blob(None)) == 0
        assert len(Ledger.from_blob(b"")) == 0
        assert Ledger().to_blob() == b""

    def test_empty_ledger_insert(self):
        ledger = Ledger.from_blob(None)
        assert ledger.insert("a" * 61) == 0
        assert ledger.to_blob() == ("a" * 61 + "     0\n").encode("ascii")

    def test_offsets_follow_allocation_order_lines_follow_digest_order(self):
        ledger = Ledger()
        assert [ledger.insert(d) for d in (D1, D2, D3)] == [0, 1, 2]
        assert [line.digest for line in ledger.lines] == [D2, D1, D3]
        assert ledger.to_blob() == (
            f"{D2}     1\n{D1}     0\n{D3}     2\n"
        ).encode("ascii")

    def test_find(self):
        ledger = Ledger()
        for digest in (D1, D2, D3):
            ledger.insert(digest)
        assert ledger.find(D1) == 0
        assert ledger.find(D2) == 1
        assert ledger.find(D3) == 2
        assert ledger.find("0" * 61) is None
        assert ledger.find("f" * 61) is None

    def test_insert_existing_digest_fails(self):
        ledger = Ledger()
        ledger.insert(D1)
        with pytest.raises(ValueError):
            ledger.insert(D1)

    def test_blob_round_trip(self):
        ledger = Ledger()
        for digest in (D3, D1, D2):
            ledger.insert(digest)
        parsed = Ledger.from_blob(ledger.to_blob())
        assert parsed.lines == ledger.lines
        assert parsed.to_blob() == ledger.to_blob()

    def test_unsorted_blob_is_rejected(self):
        blob = f"{D1}     0\n{D2}     1\n".encode("ascii")
        with pytest.raises(InvalidEncoding):
            Ledger.from_blob(blob)

    def test_duplicate_digest_blob_is_rejected(self):
        blob = f"{D1}     0\n{D1}     1\n".encode("ascii")
        with pytest.raises(InvalidEncoding):
            Ledger.from_blob(blob)

    def test_non_ascii_blob_is_rejected(self):
        with pytest.raises(InvalidEncoding):
            Ledger.from_blob("é".encode("utf-8"))

    def test_insert_beyond_field_leaves_ledger_unchanged(self):
        lines = [LedgerLine(digest=f"{i:061x}", offset=i) for i in range(3)]
        ledger = Ledger(lines)
        # pretend the ledger already holds MAX_OFFSET + 1 lines
        ledger._lines.extend([lines[-1]] * (MAX_OFFSET + 1 - len(lines)))
        before = len(ledger)
        with pytest.raises(PopulationExhausted):
            ledger.insert("f" * 61)
        assert len(ledger) == before
        assert ledger.find("f" * 61) is None

    def test_uppercase_digest_blob_is_rejected(self):
        blob = ("A" * 61 + "     0\n").encode("ascii")
        with pytest.raises(InvalidEncoding):
            Ledger.from_blob(blob)
        assert Ledger.from_blob(blob.lower()).find("a" * 61) == 0

    def test_crlf_blob_is_rejected(self):
        blob = f"{D2}     1\r\n{D1}     0\r\n".encode("ascii")
        with pytest.raises(InvalidEncoding):
            Ledger.from_blob(blob)

    def test_blob_without_final_newline_is_rejected(self):
        blob = f"{D2}     1\n{D1}     0".encode("ascii")
        with pytest.raises(InvalidEncoding):
            Ledger.from_blob(blob)
