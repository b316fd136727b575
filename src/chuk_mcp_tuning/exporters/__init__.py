"""
Export pipeline - tuning tables to files for synths, trackers and tools.

    TuningTable
    → text exporters (TUN, SCL, KBM, coll, Pd, Kontakt, Deflemask)
    → mnlgtun exporter (binary dump + XML, zipped)
    → ExportPayload → save sink
"""

from chuk_mcp_tuning.exporters.mnlgtun import (
    MnlgCentsTable,
    MnlgtunExport,
    build_mnlg_cents_table,
    cents_table_to_mnlg_binary,
    export_mnlgtun,
)
from chuk_mcp_tuning.exporters.sink import ExportPayload, save_payload
from chuk_mcp_tuning.exporters.text import (
    EXPORTERS,
    export_anamark_tun,
    export_kontakt_script,
    export_maxmsp_coll,
    export_pd_text,
    export_reference_deflemask,
    export_scala_kbm,
    export_scala_scl,
    export_text,
)

__all__ = [
    # Text
    "EXPORTERS",
    "export_anamark_tun",
    "export_scala_scl",
    "export_scala_kbm",
    "export_maxmsp_coll",
    "export_pd_text",
    "export_kontakt_script",
    "export_reference_deflemask",
    "export_text",
    # Binary
    "MnlgCentsTable",
    "MnlgtunExport",
    "build_mnlg_cents_table",
    "cents_table_to_mnlg_binary",
    "export_mnlgtun",
    # Sink
    "ExportPayload",
    "save_payload",
]
