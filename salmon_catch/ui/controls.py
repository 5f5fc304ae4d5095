from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import pandas as pd
import streamlit as st

from salmon_catch.queries.aggregations import available_regions, available_years
from salmon_catch.queries.filters import filter_df


def resolve_selection(selected: Iterable[str], options: Iterable[str]) -> List[str]:
    """Empty selection means every option; otherwise keep option order."""
    opts = list(options)
    chosen = set(selected)
    if not chosen:
        return opts
    return [o for o in opts if o in chosen]


@dataclass
class CatchFilters:
    regions: List[str]
    species: List[str]
    year_range: Optional[Tuple[int, int]]

    def apply(self, long: pd.DataFrame) -> pd.DataFrame:
        return filter_df(long, regions=self.regions, species=self.species, year_range=self.year_range)


def sidebar_filters(long: pd.DataFrame) -> CatchFilters:
    """Region / species / year widgets for the long catch table."""
    regions_all = available_regions(long)
    species_all = long["species"].dropna().astype("string").unique().tolist()
    years_all = available_years(long)

    with st.sidebar:
        st.header("Filters")
        regions = st.multiselect("Regions", regions_all, placeholder="All regions")
        species = st.multiselect("Species", species_all, placeholder="All species")
        year_range = st.slider(
            "Year range",
            min_value=years_all[0],
            max_value=years_all[-1],
            value=(years_all[0], years_all[-1]),
        ) if years_all else None

    return CatchFilters(
        regions=resolve_selection(regions, regions_all),
        species=resolve_selection(species, species_all),
        year_range=year_range,
    )
