"""
Export collaborators: JSON snapshots, the local project store and printable reports.
"""

from .snapshot import ExportError, SnapshotError, build_snapshot, export_snapshot, load_snapshot, verify_snapshot
from .store import ProjectStore
from .report import render_report_html, render_report_pdf, write_report
