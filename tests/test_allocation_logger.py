"""Tests for allocation reporting and identity formatting."""

from io import StringIO

from rich.console import Console

from perfume.formatters import OutputFormatter
from perfume.identity.allocation_logger_raw import AllocationLoggerRaw
from perfume.identity.errors import StorageFailure
from perfume.identity.models import Identity
from perfume.identity.storage import RemoteStore
from perfume.bridges.memory_bridge import MemoryBridge

from conftest import make_storage


def make_output() -> tuple[OutputFormatter, StringIO]:
    buffer = StringIO()
    console = Console(file=buffer, no_color=True, width=200)
    return OutputFormatter(no_color=True, console=console), buffer


class TestAllocationLoggerRaw:
    """Console reporting of offset lookups."""

    def test_reports_allocation_then_hit(self):
        output, buffer = make_output()
        store = RemoteStore(MemoryBridge(), logger=AllocationLoggerRaw(output))
        storage = make_storage("3fa", "a")

        store.digest_offset("bt", storage)
        store.digest_offset("bt", storage)

        lines = buffer.getvalue().splitlines()
        assert len(lines) == 2
        assert "allocated: bt/3fa offset 0 (1 lines)" in lines[0]
        assert "found: bt/3fa offset 0" in lines[1]

    def test_reports_failure_text_verbatim(self):
        output, buffer = make_output()
        AllocationLoggerRaw(output).mark_failed("bt/3fa", StorageFailure("bad [status]"))
        assert "failed: bt/3fa (bad [status])" in buffer.getvalue()


class TestIdentityFormatter:
    def test_format_line(self):
        output, buffer = make_output()
        identity = Identity("bt", "p3fa-red-cat", make_storage("3fa", "a"))

        output.print(output.identity.format_line("alice", identity))
        output.print(output.identity.format_line("alice", identity, show_storage=True))

        lines = buffer.getvalue().splitlines()
        arrow = output.symbols.Arrow
        assert lines[0] == f"alice {arrow} p3fa-red-cat"
        assert lines[1] == f"alice {arrow} p3fa-red-cat (bt/3fa:aaaaaaaa...)"

    def test_print_error(self):
        output, buffer = make_output()
        output.print_error("Storage error", "connection reset")
        assert "Storage error: connection reset" in buffer.getvalue()
