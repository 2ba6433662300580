from __future__ import annotations

from contextlib import contextmanager
from html import escape
from typing import Iterator, Optional

import streamlit as st

from src.constants import STATUS_NG, STATUS_OK

_BADGE_CLASS = {
    "info": "qa-badge-info",
    "success": "qa-badge-success",
    "warning": "qa-badge-warning",
    "danger": "qa-badge-danger",
}
_STATUS_BADGE_KIND = {STATUS_OK: "success", STATUS_NG: "danger"}


def _inject_css() -> None:
    st.markdown(
        """
<style>
:root {
  --qa-app-bg: #F5F7FA;
  --qa-card-bg: #FFFFFF;
  --qa-sidebar-bg: #111827;
  --qa-text-primary: #0F172A;
  --qa-text-secondary: #64748B;
  --qa-border: #E5E7EB;
  --qa-accent: #2563EB;
  --qa-success: #16A34A;
  --qa-warning: #D97706;
  --qa-danger: #DC2626;
}

.stApp {
  background: var(--qa-app-bg);
  color: var(--qa-text-primary);
}

.main .block-container {
  max-width: 100%;
  padding-top: 1rem;
  padding-bottom: 1.25rem;
}

[data-testid="stSidebar"] {
  background: var(--qa-sidebar-bg);
  border-right: 1px solid rgba(255, 255, 255, 0.08);
}

[data-testid="stSidebar"] * {
  color: #E5E7EB;
}

.qa-page-title {
  margin: 0;
  font-size: 2rem;
  line-height: 1.2;
  font-weight: 700;
  color: var(--qa-text-primary);
}

.qa-page-subtitle {
  margin-top: 0.35rem;
  margin-bottom: 0.75rem;
  font-size: 0.9rem;
  color: var(--qa-text-secondary);
}

.qa-divider {
  border-top: 1px solid var(--qa-border);
  margin: 0.4rem 0 1rem 0;
}

.qa-card-title {
  margin: 0;
  font-size: 1.02rem;
  font-weight: 600;
  color: var(--qa-text-primary);
}

.qa-card-help {
  margin-top: 0.2rem;
  margin-bottom: 0.7rem;
  font-size: 0.85rem;
  color: var(--qa-text-secondary);
}

.qa-kpi-card {
  border: 1px solid #e2e8f0;
  border-radius: 8px;
  background: #ffffff;
  box-shadow: 0 3px 8px rgba(15, 23, 42, 0.05);
  padding: 0.75rem 0.85rem;
  min-height: 86px;
  margin-bottom: 0.6rem;
}

.qa-kpi-card.qa-kpi-danger { border-left: 4px solid var(--qa-danger); }
.qa-kpi-card.qa-kpi-warning { border-left: 4px solid var(--qa-warning); }
.qa-kpi-card.qa-kpi-success { border-left: 4px solid var(--qa-success); }

.qa-kpi-label {
  font-size: 0.75rem;
  color: #475569;
  letter-spacing: 0.06em;
  text-transform: uppercase;
  margin-bottom: 0.2rem;
  font-weight: 600;
}

.qa-kpi-value {
  font-size: 1.75rem;
  font-weight: 700;
  color: #1e293b;
  line-height: 1.2;
  font-family: ui-monospace, SFMono-Regular, Menlo, monospace;
}

.qa-kpi-caption {
  font-size: 0.78rem;
  color: #64748b;
  margin-top: 0.2rem;
}

[data-testid="stVerticalBlockBorderWrapper"] {
  border: 1px solid #E2E8F0 !important;
  border-radius: 8px !important;
  background: var(--qa-card-bg) !important;
  box-shadow: 0 3px 8px rgba(15, 23, 42, 0.05) !important;
}

.stButton > button[kind="primary"] {
  background: var(--qa-accent);
  border-color: var(--qa-accent);
}

.qa-badge {
  display: inline-block;
  border-radius: 999px;
  padding: 0.1rem 0.5rem;
  font-size: 0.76rem;
  font-weight: 600;
  border: 1px solid transparent;
}

.qa-badge-info {
  background: #DBEAFE;
  color: #1D4ED8;
  border-color: #BFDBFE;
}

.qa-badge-success {
  background: #DCFCE7;
  color: #166534;
  border-color: #BBF7D0;
}

.qa-badge-warning {
  background: #FEF3C7;
  color: #92400E;
  border-color: #FDE68A;
}

.qa-badge-danger {
  background: #FEE2E2;
  color: #991B1B;
  border-color: #FECACA;
}
</style>
        """,
        unsafe_allow_html=True,
    )


def render_page_header(title: str, subtitle: Optional[str] = None) -> None:
    st.markdown(f'<h1 class="qa-page-title">{escape(title)}</h1>', unsafe_allow_html=True)
    if subtitle:
        st.markdown(f'<div class="qa-page-subtitle">{escape(subtitle)}</div>', unsafe_allow_html=True)
    st.markdown('<div class="qa-divider"></div>', unsafe_allow_html=True)


def _render_sidebar_brand() -> None:
    st.sidebar.markdown("### QA MATRIX")
    st.sidebar.caption("Quality Assurance Control & Monitoring")
    st.sidebar.divider()


def _render_sidebar_nav() -> None:
    with st.sidebar:
        st.page_link("Home.py", label="Matrix")
        st.page_link("pages/01_Add_Concern.py", label="Add Concern")
        st.page_link("pages/02_Import.py", label="Import")
        st.page_link("pages/03_Export_Admin.py", label="Export & Reset", icon=":material/settings:")


def init_page() -> None:
    _inject_css()
    _render_sidebar_brand()
    _render_sidebar_nav()


@contextmanager
def card(title: str, help_text: Optional[str] = None) -> Iterator[None]:
    with st.container(border=True):
        st.markdown(f'<div class="qa-card-title">{escape(title)}</div>', unsafe_allow_html=True)
        if help_text:
            st.markdown(f'<div class="qa-card-help">{escape(help_text)}</div>', unsafe_allow_html=True)
        yield


def status_badge(label: str, kind: str = "info", help_text: Optional[str] = None) -> None:
    cls = _BADGE_CLASS.get(kind, _BADGE_CLASS["info"])
    tip_attr = f' title="{escape(str(help_text), quote=True)}"' if help_text else ""
    safe_label = escape(str(label))
    st.markdown(f'<span class="qa-badge {cls}"{tip_attr}>{safe_label}</span>', unsafe_allow_html=True)


def status_kind(status: str) -> str:
    return _STATUS_BADGE_KIND.get(status, "info")


def kpi_card(
    label: str,
    value: object,
    caption: Optional[str] = None,
    kind: Optional[str] = None,
    help_text: Optional[str] = None,
) -> None:
    safe_label = escape(str(label))
    safe_value = escape(str(value))
    tip_attr = f' title="{escape(str(help_text), quote=True)}"' if help_text else ""
    cls = f"qa-kpi-card qa-kpi-{kind}" if kind else "qa-kpi-card"
    parts = [
        f'<div class="{cls}"{tip_attr}>',
        f'<div class="qa-kpi-label">{safe_label}</div>',
        f'<div class="qa-kpi-value">{safe_value}</div>',
    ]
    if caption:
        parts.append(f'<div class="qa-kpi-caption">{escape(str(caption))}</div>')
    parts.append("</div>")
    st.markdown("".join(parts), unsafe_allow_html=True)
