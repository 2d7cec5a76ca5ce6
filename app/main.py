"""
Streamlit Frontend for MiBolsillo

Three screens, reachable from the sidebar:
1. Inicio: what the app is and where to go
2. Movimientos: totals, filters, the add form and the filtered list
3. Dashboard: totals and the 7-day income/expense chart

Every screen reads the same MovementStore, created once per process by
create_app_components() and passed to the flows. After any mutation the
page reruns and every derived view is recomputed from the store.
"""

import html

import streamlit as st

from mibolsillo.config import get_settings, validate_all_settings
from mibolsillo.models.movement import (
    MovementFilter,
    MovementForm,
    MovementSummary,
    MovementType,
    TypeFilter,
    suggested_categories,
)
from mibolsillo.orchestrator import DashboardFlow, MovementFlow, create_app_components
from mibolsillo.ui import (
    build_trend_figure,
    format_money,
    movement_detail,
    movement_headline,
    range_label,
)


PAGES = ["🏠 Inicio", "💸 Movimientos", "📊 Dashboard"]

# Page configuration
st.set_page_config(
    page_title="MiBolsillo",
    page_icon="👛",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .mov-row {
        padding: 10px 14px;
        border: 1px solid #e5e7eb;
        border-radius: 8px;
        margin: 6px 0;
    }
    .mov-detail {
        font-size: 0.8em;
        color: #6b7280;
    }
    .tag-income {
        float: right;
        font-size: 0.75em;
        padding: 2px 8px;
        border-radius: 4px;
        background-color: #dcfce7;
        color: #15803d;
    }
    .tag-expense {
        float: right;
        font-size: 0.75em;
        padding: 2px 8px;
        border-radius: 4px;
        background-color: #fee2e2;
        color: #b91c1c;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_components():
    """Get or create application components (cached)."""
    try:
        return create_app_components(use_storage=True)
    except Exception as e:
        st.error(f"No se pudo abrir el almacenamiento local: {e}")
        return create_app_components(use_storage=False)


def main():
    """Main application entry point."""
    settings_status = validate_all_settings()
    invalid = [name for name in ("storage", "app") if not settings_status[name]]
    if invalid:
        st.error("Configuración inválida:")
        for name in invalid:
            st.code(settings_status[f"{name}_error"])
        st.stop()

    movement_flow, dashboard_flow, _ = get_components()

    if "page" not in st.session_state:
        st.session_state.page = PAGES[0]

    st.sidebar.title("👛 MiBolsillo")
    st.sidebar.markdown("---")
    st.sidebar.radio("Ir a:", PAGES, key="page")
    st.sidebar.markdown("---")
    st.sidebar.caption("Tus datos quedan guardados en esta computadora.")
    app_settings = get_settings().app
    if app_settings.app_environment != "production":
        st.sidebar.caption(f"Entorno: {app_settings.app_environment}")

    page = st.session_state.page
    if page == PAGES[0]:
        render_home_page()
    elif page == PAGES[1]:
        render_movements_page(movement_flow)
    elif page == PAGES[2]:
        render_dashboard_page(dashboard_flow)


def _go_to(page: str) -> None:
    st.session_state.page = page


def render_home_page():
    """Render the landing page."""
    st.title("👛 MiBolsillo")
    st.markdown(
        "Registrá tus ingresos y egresos, mirá tus totales y la tendencia "
        "de la última semana."
    )

    col1, col2 = st.columns(2)
    with col1:
        st.button("💸 Ir a Movimientos", type="primary",
                  on_click=_go_to, args=(PAGES[1],))
    with col2:
        st.button("📊 Ir al Dashboard", on_click=_go_to, args=(PAGES[2],))


def render_kpis(summary: MovementSummary):
    """Income, expense and net cards."""
    symbol = get_settings().app.currency_symbol
    col1, col2, col3 = st.columns(3)
    col1.metric("Ingresos", format_money(summary.income, symbol))
    col2.metric("Egresos", format_money(summary.expense, symbol))
    col3.metric("Neto", format_money(summary.net, symbol))


# =============================================================================
# MOVEMENTS PAGE
# =============================================================================

def _reset_filters():
    st.session_state.f_type = TypeFilter.ALL
    st.session_state.f_category = None
    st.session_state.f_text = ""
    st.session_state.f_days = None


def _forget(*keys: str) -> None:
    # Deleting a widget key makes the widget start over from its default
    for key in keys:
        st.session_state.pop(key, None)


def _reset_form_category():
    _forget("form_category")


def _submit_movement(movement_flow: MovementFlow):
    """Form callback: runs before the rerun, so it may reset widget state."""
    form = MovementForm(
        type=st.session_state.form_type,
        category=st.session_state.get("form_category") or "",
        description=st.session_state.get("form_description", ""),
        amount=st.session_state.get("form_amount", ""),
        note=st.session_state.get("form_note", ""),
    )
    movement, validation = movement_flow.submit(form)

    if movement is None:
        st.session_state.form_error = validation.first_error
        return

    st.session_state.form_error = None
    st.session_state.form_saved = movement.description
    st.session_state.form_type = MovementType.EXPENSE
    _forget("form_category", "form_description", "form_amount", "form_note")


def _clear_all_movements(movement_flow: MovementFlow):
    removed = movement_flow.clear_all()
    st.session_state.cleared_count = removed
    _forget("confirm_clear")


def render_filters(movement_flow: MovementFlow) -> MovementFilter:
    """Render the filter controls and return the active filter."""
    if "f_type" not in st.session_state:
        _reset_filters()

    range_options = [None] + get_settings().app.filter_ranges_list

    st.subheader("Filtros")
    col1, col2, col3, col4 = st.columns([1, 2, 2, 1])
    with col1:
        st.selectbox(
            "Tipo",
            options=list(TypeFilter),
            format_func=lambda t: t.label,
            key="f_type",
        )
    with col2:
        st.selectbox(
            "Categoría",
            options=[None] + movement_flow.categories(),
            format_func=lambda c: "Todas" if c is None else c,
            key="f_category",
        )
    with col3:
        st.text_input(
            "Buscar (descripción/nota)",
            placeholder="Ej: sueldo, super, farmacia…",
            key="f_text",
        )
    with col4:
        st.selectbox(
            "Rango",
            options=range_options,
            format_func=range_label,
            key="f_days",
        )

    return MovementFilter(
        type=st.session_state.f_type,
        category=st.session_state.f_category,
        text=st.session_state.f_text,
        days=st.session_state.f_days,
    )


def render_add_form(movement_flow: MovementFlow):
    """Render the add-movement form."""
    if "form_type" not in st.session_state:
        st.session_state.form_type = MovementType.EXPENSE

    st.subheader("Agregar movimiento")

    # Outside the form so the category list follows the chosen type
    st.selectbox(
        "Tipo",
        options=[MovementType.EXPENSE, MovementType.INCOME],
        format_func=lambda t: t.label,
        key="form_type",
        on_change=_reset_form_category,
    )

    with st.form("form_movement"):
        col1, col2, col3 = st.columns([2, 2, 1])
        with col1:
            st.selectbox(
                "Categoría",
                options=list(suggested_categories(st.session_state.form_type)),
                index=None,
                placeholder="Elegí categoría",
                key="form_category",
            )
        with col2:
            st.text_input(
                "Descripción",
                placeholder="Ej: Super chino / Sueldo / Farmacia…",
                key="form_description",
            )
        with col3:
            st.text_input(
                "Monto (ARS)",
                placeholder="Ej: 2500,50",
                key="form_amount",
            )
        st.text_input(
            "Nota (opcional)",
            placeholder="Detalle / referencia (opcional)",
            key="form_note",
        )

        st.form_submit_button(
            "Agregar",
            type="primary",
            on_click=_submit_movement,
            args=(movement_flow,),
        )

    if st.session_state.get("form_error"):
        st.error(st.session_state.form_error)
        st.session_state.form_error = None
    elif st.session_state.get("form_saved"):
        st.success(f"✅ Movimiento guardado: {st.session_state.form_saved}")
        st.session_state.form_saved = None


def render_movement_list(movements: list):
    """Render the filtered list."""
    symbol = get_settings().app.currency_symbol

    st.subheader("Resultados")
    if not movements:
        st.caption("No hay movimientos con los filtros actuales.")
        return

    for m in movements:
        tag_class = "tag-income" if m.type is MovementType.INCOME else "tag-expense"
        st.markdown(f"""
        <div class="mov-row">
            <span class="{tag_class}">{m.type.label.upper()}</span>
            <strong>{html.escape(movement_headline(m, symbol))}</strong>
            <div class="mov-detail">{html.escape(movement_detail(m))}</div>
        </div>
        """, unsafe_allow_html=True)


def render_movements_page(movement_flow: MovementFlow):
    """Render the movements page."""
    st.title("💸 Movimientos")
    st.markdown(
        "Cargá ingresos y egresos (con categoría y nota). Se comparten con el "
        "Dashboard y quedan guardados en esta computadora."
    )

    render_kpis(movement_flow.summary())
    st.markdown("---")

    spec = render_filters(movement_flow)
    filtered = movement_flow.list_movements(spec)

    col1, col2, col3 = st.columns([1, 2, 2])
    with col1:
        st.button("Limpiar filtros", on_click=_reset_filters)
    with col2:
        confirm = st.checkbox("Sí, borrar TODOS los movimientos", key="confirm_clear")
        st.button(
            "🗑️ Borrar todo",
            disabled=not confirm,
            on_click=_clear_all_movements,
            args=(movement_flow,),
        )
        if st.session_state.get("cleared_count") is not None:
            st.info(f"Se borraron {st.session_state.cleared_count} movimiento(s)")
            st.session_state.cleared_count = None
    with col3:
        st.caption(f"{len(filtered)} movimiento(s) mostrados")

    st.markdown("---")
    render_add_form(movement_flow)

    st.markdown("---")
    render_movement_list(filtered)


# =============================================================================
# DASHBOARD PAGE
# =============================================================================

def render_dashboard_page(dashboard_flow: DashboardFlow):
    """Render the dashboard page."""
    st.title("📊 Dashboard")
    st.markdown("Resumen de tus movimientos.")

    render_kpis(dashboard_flow.summary())

    series = dashboard_flow.weekly_series()
    fig = build_trend_figure(series, title=f"Últimos {dashboard_flow.trend_days} días")
    st.plotly_chart(fig, use_container_width=True)


if __name__ == "__main__":
    main()
