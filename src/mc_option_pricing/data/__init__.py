"""
Option test records: schema and file loading.
"""

from mc_option_pricing.data.loader import (
    DataLoadError,
    RecordLoadResult,
    load_option_records,
    parse_record_line,
    parse_records,
    records_to_frame,
)
from mc_option_pricing.data.schemas import RECORD_FIELDS, OptionRecord

__all__ = [
    "DataLoadError",
    "OptionRecord",
    "RECORD_FIELDS",
    "RecordLoadResult",
    "load_option_records",
    "parse_record_line",
    "parse_records",
    "records_to_frame",
]
