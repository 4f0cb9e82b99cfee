"""
Telecom Dimensioning Tool - Streamlit UI
========================================

Single-page interface:
1. Network selection (GSM, UMTS, LTE, Hertzien, Optique)
2. Parameter inputs, recomputed on every change
3. Result cards and charts
4. Sensitivity sweep over one parameter
5. Report, JSON export and local project save/load

Run with:
    streamlit run teldim/ui/app.py
"""

import json
from pathlib import Path

import numpy as np
import streamlit as st

from teldim.export.report import format_currency, render_report_html, render_report_pdf
from teldim.export.snapshot import ExportError, SnapshotError, build_snapshot, epoch_millis
from teldim.export.store import ProjectStore
from teldim.session import DimensioningSession
from teldim.sizing.fields import field_specs
from teldim.sizing.models import NetworkType
from teldim.sizing.sizer import format_number, sweep
from teldim.ui.charts import SITE_GRID_LIMIT, bar_figure, pie_figure, site_icons, sweep_figure

STORE_DIR = Path.home() / ".teldim" / "projects"


st.set_page_config(
    page_title="Dimensionnement des Réseaux Télécoms",
    page_icon="📡",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .stMetric {
        background-color: #f0f2f6;
        padding: 10px;
        border-radius: 5px;
    }
    h1 {
        color: #1f77b4;
    }
</style>
""", unsafe_allow_html=True)


def get_session() -> DimensioningSession:
    """Session stored across Streamlit reruns."""
    if "session" not in st.session_state:
        st.session_state["session"] = DimensioningSession()
    return st.session_state["session"]


def get_store() -> ProjectStore:
    return ProjectStore(STORE_DIR)


def _widget_key(network: NetworkType, name: str) -> str:
    return f"{network.value}_{name}"


def request_widget_sync(network: NetworkType) -> None:
    """Refresh the input widgets of `network` on the next rerun (after a load or reset)."""
    st.session_state["pending_sync"] = network.value


def _apply_widget_sync(session: DimensioningSession) -> None:
    # Must run before the text inputs are instantiated
    pending = st.session_state.pop("pending_sync", None)
    if pending is None:
        return
    network = NetworkType.parse(pending)
    params = session.parameters[network]
    for spec in field_specs(network):
        st.session_state[_widget_key(network, spec.name)] = format_number(getattr(params, spec.name))


def render_parameter_inputs(session: DimensioningSession) -> None:
    """Parameter inputs of the active network; every edit recomputes the results."""
    _apply_widget_sync(session)
    network = session.network
    params = session.active_parameters

    section = None
    cols = None
    for spec in field_specs(network):
        if spec.section != section:
            section = spec.section
            st.markdown(f"**{section}**")
            cols = st.columns(2)
            i_in_section = 0
        key = _widget_key(network, spec.name)
        if key not in st.session_state:
            st.session_state[key] = format_number(getattr(params, spec.name))

        bounds = ""
        if spec.min_value is not None and spec.max_value is not None:
            bounds = f"Plage conseillée : {format_number(spec.min_value)} à {format_number(spec.max_value)}"
        with cols[i_in_section % 2]:
            raw = st.text_input(f"{spec.label} ({spec.unit})", key=key, help=bounds or None)
        i_in_section += 1

        if raw != format_number(getattr(session.active_parameters, spec.name)):
            session.update_parameter(spec.name, raw)


def render_results(session: DimensioningSession) -> None:
    st.subheader("📊 Résultats du Dimensionnement")
    r = session.results
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Sites Nécessaires", r.sites)
    with col2:
        st.metric("Capacité Totale", r.capacity_label)
    with col3:
        st.metric("Taux de Couverture", f"{r.coverage}%")
    with col4:
        st.metric("Coût Estimé", f"{format_currency(r.cost)} {session.assumptions.costs.currency}")

    extra = f"{format_number(r.metric_value)} {r.metric_unit}"
    if r.availability is not None:
        extra += f" (disponibilité {format_number(r.availability)}%)"
    st.caption(f"Indicateur {r.metric_name} : {extra}")

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(pie_figure(r), use_container_width=True)
    with col2:
        st.plotly_chart(bar_figure(r), use_container_width=True)

    st.markdown(f"**Carte de Couverture - {session.network.value.upper()}**")
    st.caption(f"Simulation de la répartition des {r.sites} sites")
    icons = site_icons(r)
    if icons:
        grid = st.columns(8)
        for i, icon in enumerate(icons):
            grid[i % 8].markdown(f"<div style='text-align:center;font-size:1.8rem'>{icon}</div>", unsafe_allow_html=True)
    if r.sites > SITE_GRID_LIMIT:
        st.caption(f"+{r.sites - SITE_GRID_LIMIT} sites non affichés")


def render_sensitivity(session: DimensioningSession) -> None:
    st.subheader("📈 Analyse de Sensibilité")
    specs = field_specs(session.network)
    labels = {spec.label: spec for spec in specs}
    col1, col2 = st.columns(2)
    with col1:
        choice = st.selectbox("Paramètre", list(labels), key=f"sweep_param_{session.network.value}")
    with col2:
        metric = st.selectbox("Résultat", ["sites", "capacity", "coverage", "cost", session.results.metric_name])

    spec = labels[choice]
    current = float(getattr(session.active_parameters, spec.name))
    lo = spec.min_value if spec.min_value is not None else current * 0.5
    hi = spec.max_value if spec.max_value is not None else max(current * 1.5, lo + 1.0)
    values = np.linspace(lo, hi, 21)

    df = sweep(session.network, session.active_parameters, spec.name, values, session.assumptions)
    st.plotly_chart(sweep_figure(df, spec.name, metric), use_container_width=True)
    with st.expander("Données"):
        st.dataframe(df, hide_index=True, use_container_width=True)


def render_actions(session: DimensioningSession) -> None:
    st.subheader("📁 Rapport et Sauvegarde")
    network = session.network
    snapshot = build_snapshot(network, session.active_parameters, session.results)
    stamp = epoch_millis()

    col1, col2, col3 = st.columns(3)
    with col1:
        try:
            st.download_button(
                "📄 Rapport HTML",
                data=render_report_html(snapshot),
                file_name=f"rapport_{network.value.upper()}_{stamp}.html",
                mime="text/html",
                use_container_width=True,
            )
            st.download_button(
                "📄 Rapport PDF",
                data=render_report_pdf(snapshot),
                file_name=f"rapport_{network.value.upper()}_{stamp}.pdf",
                mime="application/pdf",
                use_container_width=True,
            )
        except (SnapshotError, ExportError) as e:
            st.error(f"❌ Erreur lors de la génération du rapport : {e}")
    with col2:
        st.download_button(
            "📤 Exporter JSON",
            data=json.dumps(snapshot, indent=2, ensure_ascii=False),
            file_name=f"dimensionnement_{network.value}_{stamp}.json",
            mime="application/json",
            use_container_width=True,
        )
    with col3:
        store = get_store()
        if st.button("💾 Sauvegarder le projet", use_container_width=True):
            try:
                store.save(snapshot)
                st.success("💾 Projet sauvegardé avec succès!")
            except (SnapshotError, ExportError) as e:
                st.error(f"❌ Erreur lors de la sauvegarde du projet : {e}")
        if st.button("📂 Charger le projet", use_container_width=True):
            try:
                project = store.load(network)
            except SnapshotError as e:
                st.error(f"❌ {e}")
                project = None
            if project is None:
                st.info("Aucun projet sauvegardé pour ce réseau")
            else:
                session.replace_parameters(network, project["parameters"])
                request_widget_sync(network)
                st.rerun()


def main():
    """Main application."""
    st.title("📡 Outil de Dimensionnement des Réseaux Télécoms")
    st.caption("GSM · UMTS · LTE · Faisceaux Hertziens · Fibre Optique")

    session = get_session()

    with st.sidebar:
        st.header("Type de Réseau")
        networks = list(NetworkType)
        choice = st.radio(
            "Réseau",
            networks,
            index=networks.index(session.network),
            format_func=lambda n: f"{n.icon} {n.display_name}",
        )
        if choice != session.network:
            session.select(choice)

        st.divider()
        if st.button("↺ Valeurs par défaut", use_container_width=True):
            session.reset()
            request_widget_sync(session.network)
            st.rerun()

        st.divider()
        saved = get_store().keys()
        st.caption(f"Projets sauvegardés : {', '.join(saved) if saved else 'aucun'}")

    col_params, col_results = st.columns([2, 3])
    with col_params:
        st.subheader("⚙️ Paramètres de Configuration")
        render_parameter_inputs(session)
    with col_results:
        render_results(session)

    st.divider()
    render_sensitivity(session)
    st.divider()
    render_actions(session)


if __name__ == "__main__":
    main()
