"""Shared Streamlit styling for the intake suite.

Import `render_theme_css` and `render_nav_bar` instead of inlining CSS in
each page.
"""

from __future__ import annotations

import html as html_mod

import streamlit as st

_BASE_CSS = """\
@import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap');

#MainMenu, footer,
div[data-testid="stToolbar"] { display: none !important; }

.stApp {
    font-family: 'Inter', -apple-system, BlinkMacSystemFont, sans-serif;
}

.nav-bar {
    display: flex;
    align-items: center;
    justify-content: space-between;
    padding: 10px 4px;
    margin: -1rem 0 1.2rem 0;
    border-bottom: 1px solid rgba(0,0,0,0.07);
}
.nav-brand {
    font-size: 1.1rem;
    font-weight: 700;
    color: #1a2744;
}
.nav-title {
    font-size: 0.95rem;
    font-weight: 500;
    color: #5a6a85;
}

.field-error {
    color: #dc2626;
    font-size: 0.84rem;
    margin: -6px 0 10px 0;
}
.request-number {
    font-family: 'SF Mono', Menlo, monospace;
    font-size: 1.4rem;
    font-weight: 700;
    color: #1a2744;
    background: #fef9c3;
    border-radius: 8px;
    padding: 8px 14px;
    display: inline-block;
}
"""


def render_theme_css(extra_css: str = "") -> None:
    """Inject the shared stylesheet. Pass *extra_css* for page-specific rules."""
    css = _BASE_CSS
    if extra_css:
        css += "\n" + extra_css
    st.markdown(f"<style>\n{css}\n</style>", unsafe_allow_html=True)


def render_nav_bar(page_title: str, brand: str = "LinkToLawyers") -> None:
    """Render the brand on the left and the page title on the right."""
    st.markdown(
        f'<div class="nav-bar">'
        f'<div class="nav-brand">{html_mod.escape(brand)}</div>'
        f'<div class="nav-title">{html_mod.escape(page_title)}</div>'
        f'</div>',
        unsafe_allow_html=True,
    )


def render_field_error(message: str) -> None:
    st.markdown(f'<div class="field-error">{html_mod.escape(message)}</div>', unsafe_allow_html=True)
