from __future__ import annotations

import streamlit as st

APP_CSS = r"""
/* Muted terrain-toned page background */
[data-testid="stAppViewContainer"] {
  background:
    radial-gradient(
      1100px 700px at 15% 0%,
      rgba(34, 139, 34, 0.08),
      rgba(0,0,0,0) 60%
    ),
    radial-gradient(
      900px 600px at 85% 10%,
      rgba(30, 64, 175, 0.07),
      rgba(0,0,0,0) 55%
    );
}

[data-testid="stSidebar"] {
  border-right: 1px solid rgba(17, 24, 39, 0.08);
}

[data-testid="stSidebar"] [data-testid="stVerticalBlock"] {
  gap: 0.6rem;
}

/* Layer rows in the materials expander */
details {
  border: 1px solid rgba(17, 24, 39, 0.08) !important;
  border-radius: 10px !important;
}

[data-testid="stMetricValue"] {
  font-variant-numeric: tabular-nums;
}
"""


def inject_global_styles() -> None:
    st.markdown(f"<style>{APP_CSS}</style>", unsafe_allow_html=True)
