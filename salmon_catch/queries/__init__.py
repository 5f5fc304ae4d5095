from .filters import filter_df, filter_equals, filter_isin, filter_present, filter_range
from .aggregations import aggregate, register_reduction, sort_table
from .reshape import long_to_wide, wide_to_long
from .joins import join_region_definitions

__all__ = [
    "filter_df", "filter_equals", "filter_isin", "filter_present", "filter_range",
    "aggregate", "register_reduction", "sort_table",
    "long_to_wide", "wide_to_long",
    "join_region_definitions",
]
