"""
Printable dimensioning report (HTML for the browser print dialog, PDF via reportlab).
"""

import html
import logging
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, List, Union

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..sizing.fields import get_unit
from ..sizing.models import DimensioningResult
from ..sizing.sizer import format_number
from .snapshot import ExportError, epoch_millis, parse_snapshot

logger = logging.getLogger(__name__)

RECOMMENDATIONS = [
    "Optimiser la position des sites pour une meilleure couverture",
    "Considérer les obstacles géographiques et climatiques",
    "Prévoir une marge de capacité pour la croissance future",
    "Intégrer les aspects de sécurité et redondance",
    "Valider les résultats avec des mesures sur site",
]

REPORT_CSS = """
    body { font-family: Arial, sans-serif; margin: 20px; line-height: 1.6; }
    .header { text-align: center; border-bottom: 2px solid #333; padding-bottom: 20px; margin-bottom: 30px; }
    .section { margin-bottom: 25px; }
    .section h2 { color: #2563eb; border-bottom: 1px solid #ddd; padding-bottom: 5px; }
    .parameter-table, .result-table { width: 100%; border-collapse: collapse; margin: 10px 0; }
    .parameter-table th, .parameter-table td, .result-table th, .result-table td {
        border: 1px solid #ddd; padding: 8px; text-align: left;
    }
    .parameter-table th, .result-table th { background-color: #f5f5f5; }
    .footer { margin-top: 40px; text-align: center; font-size: 12px; color: #666; }
    .cost { font-weight: bold; color: #059669; }
"""


def format_currency(amount: float, separator: str = "\u202f") -> str:
    """Group thousands the way fr-FR does: 3 420 000 000."""
    return f"{int(round(amount)):,}".replace(",", separator)


def _parameter_rows(network: str, parameters: Dict[str, Any]) -> List[List[str]]:
    return [
        [key[:1].upper() + key[1:], format_number(value), get_unit(network, key)]
        for key, value in parameters.items()
    ]


def _result_rows(results: DimensioningResult, currency: str, separator: str) -> List[List[str]]:
    rows = [
        ["Sites nécessaires", str(results.sites)],
        ["Capacité totale", results.capacity_label],
        ["Taux de couverture", f"{results.coverage}%"],
        ["Coût estimé", f"{format_currency(results.cost, separator)} {currency}"],
        [f"Indicateur ({results.metric_name})", f"{format_number(results.metric_value)} {results.metric_unit}"],
    ]
    if results.availability is not None:
        rows.append(["Disponibilité", f"{format_number(results.availability)}%"])
    return rows


def render_report_html(snapshot: Dict[str, Any], currency: str = "FCFA") -> str:
    """
    Render a standalone HTML report for one snapshot.

    The document is meant to be opened in a browser and printed to PDF.
    """
    net, _, results = parse_snapshot(snapshot)
    title = net.value.upper()
    meta = snapshot.get("metadata", {})
    esc = html.escape

    param_html = "".join(
        f"<tr><td>{esc(name)}</td><td>{esc(value)}</td><td>{esc(unit)}</td></tr>"
        for name, value, unit in _parameter_rows(net.value, snapshot["parameters"])
    )
    result_html = ""
    for label, value in _result_rows(results, currency, "\u202f"):
        cls = ' class="cost"' if label == "Coût estimé" else ""
        result_html += f"<tr><td>{esc(label)}</td><td{cls}><strong>{esc(value)}</strong></td></tr>"
    reco_html = "".join(f"<li>{esc(r)}</li>" for r in RECOMMENDATIONS)

    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>Rapport de Dimensionnement {esc(title)}</title>
    <style>{REPORT_CSS}</style>
</head>
<body>
    <div class="header">
        <h1>RAPPORT DE DIMENSIONNEMENT {esc(title)}</h1>
        <p><strong>Université Cheikh Anta Diop de Dakar (UCAD)</strong></p>
        <p>DIC2_INFO/M1_GLSI/DGI/ESP - 2024/2025</p>
        <p>Date de génération: {esc(str(snapshot.get("timestamp", "")))}</p>
    </div>
    <div class="section">
        <h2>⚙️ Paramètres de Configuration</h2>
        <table class="parameter-table">
            <thead><tr><th>Paramètre</th><th>Valeur</th><th>Unité</th></tr></thead>
            <tbody>{param_html}</tbody>
        </table>
    </div>
    <div class="section">
        <h2>📊 Résultats du Dimensionnement</h2>
        <table class="result-table">
            <thead><tr><th>Métrique</th><th>Valeur</th></tr></thead>
            <tbody>{result_html}</tbody>
        </table>
    </div>
    <div class="section">
        <h2>📈 Analyse et Recommandations</h2>
        <h3>Méthodologie</h3>
        <p>Ce dimensionnement a été calculé en utilisant les algorithmes standards pour les réseaux {esc(title)},
        en tenant compte des spécificités du contexte sénégalais.</p>
        <h3>Recommandations</h3>
        <ul>{reco_html}</ul>
    </div>
    <div class="footer">
        <p>Rapport généré par l'Outil de Dimensionnement des Réseaux Télécoms</p>
        <p>{esc(str(meta.get("university", "")))} - {esc(str(meta.get("course", "")))}</p>
        <p>© 2024/2025 - Projet Académique</p>
    </div>
</body>
</html>
"""


def _table(rows: List[List[str]], header: List[str]) -> Table:
    table = Table([header] + rows, hAlign="LEFT")
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#f5f5f5")),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#dddddd")),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LEFTPADDING", (0, 0), (-1, -1), 6),
        ("RIGHTPADDING", (0, 0), (-1, -1), 6),
    ]))
    return table


def render_report_pdf(snapshot: Dict[str, Any], currency: str = "FCFA") -> bytes:
    """Render the report as an A4 PDF document; returns the PDF bytes."""
    net, _, results = parse_snapshot(snapshot)
    title = net.value.upper()
    meta = snapshot.get("metadata", {})

    styles = getSampleStyleSheet()
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer, pagesize=A4, leftMargin=2 * cm, rightMargin=2 * cm, topMargin=2 * cm, bottomMargin=2 * cm,
        title=f"Rapport de Dimensionnement {title}",
    )

    elements = [
        Paragraph(f"RAPPORT DE DIMENSIONNEMENT {title}", styles["Title"]),
        Paragraph("Université Cheikh Anta Diop de Dakar (UCAD)", styles["Normal"]),
        Paragraph(f"Date de génération: {html.escape(str(snapshot.get('timestamp', '')))}", styles["Normal"]),
        Spacer(1, 0.6 * cm),
        Paragraph("Paramètres de Configuration", styles["Heading2"]),
        _table(_parameter_rows(net.value, snapshot["parameters"]), ["Paramètre", "Valeur", "Unité"]),
        Spacer(1, 0.6 * cm),
        Paragraph("Résultats du Dimensionnement", styles["Heading2"]),
        # Standard PDF fonts lack the narrow no-break space
        _table(_result_rows(results, currency, " "), ["Métrique", "Valeur"]),
        Spacer(1, 0.6 * cm),
        Paragraph("Recommandations", styles["Heading2"]),
    ]
    elements.extend(Paragraph(f"• {html.escape(r)}", styles["Normal"]) for r in RECOMMENDATIONS)
    elements.append(Spacer(1, 1 * cm))
    elements.append(Paragraph(
        html.escape(f"{meta.get('university', '')} - {meta.get('course', '')}"), styles["Italic"]
    ))

    doc.build(elements)
    return buffer.getvalue()


def write_report(
    snapshot: Dict[str, Any],
    output_dir: Union[str, Path],
    fmt: str = "html",
    currency: str = "FCFA",
) -> Path:
    """
    Write `rapport_<NETWORK>_<epoch ms>.<fmt>` into `output_dir`.

    Returns:
        Path to the report file
    """
    fmt = fmt.lower()
    if fmt not in ("html", "pdf"):
        raise ValueError(f"Unsupported report format: {fmt}")
    net, _, _ = parse_snapshot(snapshot)
    path = Path(output_dir) / f"rapport_{net.value.upper()}_{epoch_millis()}.{fmt}"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if fmt == "pdf":
            path.write_bytes(render_report_pdf(snapshot, currency))
        else:
            path.write_text(render_report_html(snapshot, currency), encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Could not write report {path}: {e}") from e
    logger.info("Report written to: %s", path)
    return path
