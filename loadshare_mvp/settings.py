from __future__ import annotations

import logging
import os

# Optional: load .env locally. Streamlit Cloud reads st.secrets instead.
try:
    from dotenv import load_dotenv
    load_dotenv()
except Exception:
    pass

DEFAULT_APP_TITLE = "LoadShare — Household Mental Load Mirror"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_setting(key: str, default: str = "") -> str:
    """Read a setting from Streamlit secrets, falling back to the environment."""
    try:
        import streamlit as st
        return str(st.secrets[key])
    except Exception:
        return str(os.getenv(key, default) or default)


def get_bool_setting(key: str, default: bool = False) -> bool:
    raw = get_setting(key, "1" if default else "0").strip().lower()
    return raw in ("1", "true", "yes", "on")


def configure_logging(level: str | None = None) -> None:
    level_name = (level or get_setting("LOADSHARE_LOG_LEVEL", "WARNING")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format=LOG_FORMAT,
    )
