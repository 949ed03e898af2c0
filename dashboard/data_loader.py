"""
Dashboard data loader.

All functions are decorated with ``@st.cache_data`` so Streamlit reads the
dataset and the county mapping once per file path instead of on every widget
interaction.  Rows are frozen ``LaborRow`` models, so handing the same cached
tuple to every rerun is safe.

A dataset that fails to load comes back as an empty tuple (the loader logs the
cause); the app then renders zeros.  A missing county mapping returns an empty
dict so the county picker simply has nothing to offer.
"""

from __future__ import annotations

import logging

import streamlit as st

from stranded_talent.geography.region_map import load_county_mapping
from stranded_talent.ingestion.dataset_loader import load_rows
from stranded_talent.models.row import LaborRow
from stranded_talent.taxonomy.labor_taxonomy import Region

logger = logging.getLogger(__name__)


@st.cache_data(show_spinner=False)
def load_dataset(dataset_path: str) -> tuple[LaborRow, ...]:
    """Load the summary dataset at *dataset_path* (cached per path)."""
    return load_rows(dataset_path)


@st.cache_data(show_spinner=False)
def load_counties(mapping_path: str) -> dict[str, Region]:
    """Load the county → region mapping, or ``{}`` when it is unavailable."""
    try:
        return load_county_mapping(mapping_path)
    except (FileNotFoundError, ValueError) as exc:
        logger.warning("County mapping unavailable: %s", exc)
        return {}
