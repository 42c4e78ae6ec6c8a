"""
Audit trail for randvar computations.

Every translation, fit, and simulation run appends a timestamped entry to
the module-level ``audit_log``.  Boundary clamps in the quantile function
and other non-fatal diagnostics are recorded as ``WARNING`` entries in
addition to being issued through :mod:`warnings`.

The log lives in memory only; ``export_text`` renders it for a report and
``to_dict`` / ``from_dict`` let a caller carry it elsewhere.
"""

import datetime
from typing import Dict, List


class AuditLog:
    """Timestamped audit trail of computations and diagnostics."""

    def __init__(self, name: str = "randvar"):
        self.name = name
        self.entries: List[Dict[str, str]] = []

    def log(self, action_type: str, description: str, details: str = ""):
        entry = {
            'timestamp': datetime.datetime.now().isoformat(),
            'action': action_type,
            'description': description,
            'details': details,
        }
        self.entries.append(entry)

    def log_assumption(self, assumption: str, source: str = ""):
        self.log("ASSUMPTION", assumption, f"Source: {source}" if source else "")

    def log_computation(self, calc_type: str, details: str = ""):
        self.log("COMPUTATION", calc_type, details)

    def log_warning(self, warning: str, details: str = ""):
        self.log("WARNING", warning, details)

    def filter(self, action_type: str) -> List[Dict[str, str]]:
        """Return the entries whose action matches *action_type*."""
        return [e for e in self.entries if e['action'] == action_type]

    def clear(self):
        self.entries = []

    def export_text(self) -> str:
        lines = [
            f"{'='*70}",
            f"  {self.name} - Audit Log",
            f"  Exported: {datetime.datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            f"{'='*70}\n",
        ]
        for e in self.entries:
            ts = e['timestamp'][:19].replace('T', ' ')
            lines.append(f"[{ts}] [{e['action']}] {e['description']}")
            if e['details']:
                for dl in e['details'].split('\n'):
                    lines.append(f"    {dl}")
        return '\n'.join(lines)

    def to_dict(self) -> List[Dict]:
        return list(self.entries)

    def from_dict(self, data: List[Dict]):
        self.entries = list(data)

    def __len__(self):
        return len(self.entries)


# Global audit log instance
audit_log = AuditLog()
