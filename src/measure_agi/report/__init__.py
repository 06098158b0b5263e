"""Record set export."""

from measure_agi.report.export import dump_snapshot, export_snapshot

__all__ = ["dump_snapshot", "export_snapshot"]
