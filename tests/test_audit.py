"""Tests for the audit trail."""

from randvar.audit import AuditLog


class TestAuditLog:

    def test_entries_are_recorded(self):
        log = AuditLog()
        log.log_computation("FIT", "Normal to 10 values")
        log.log_assumption("cursor shared", "nonparametric")
        log.log_warning("clamped")
        assert len(log) == 3
        assert [e['action'] for e in log.entries] == ["COMPUTATION", "ASSUMPTION", "WARNING"]
        assert log.entries[1]['details'] == "Source: nonparametric"

    def test_filter(self):
        log = AuditLog()
        log.log_warning("a")
        log.log_computation("b")
        log.log_warning("c")
        assert [e['description'] for e in log.filter("WARNING")] == ["a", "c"]

    def test_export_text(self):
        log = AuditLog(name="unit")
        log.log_computation("SAMPLE_MC", "10 iterations\n2 variables")
        text = log.export_text()
        assert "unit" in text
        assert "[COMPUTATION] SAMPLE_MC" in text
        assert "    2 variables" in text

    def test_dict_round_trip_and_clear(self):
        log = AuditLog()
        log.log("CUSTOM", "entry")
        other = AuditLog()
        other.from_dict(log.to_dict())
        assert other.entries == log.entries
        other.clear()
        assert len(other) == 0
        assert len(log) == 1
