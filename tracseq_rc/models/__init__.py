"""Domain models for the sample-sheet reverse-complement tool.

Rows are plain tuples of strings; the models here describe what the engine
derives from them (column descriptors, correlation records) and what a run
reports back to its caller.
"""

from .column_descriptor import ColumnDescriptor, CorrelationRecord
from .config_models import CanonicalColumn, ClassifierThresholds, MissingDelimiterPolicy, RcConfig
from .document import LocatedHeader, Row, RowResult, TabularDocument
from .processing_result import ProcessingResult

__all__ = [
    # Configuration models
    "CanonicalColumn",
    "ClassifierThresholds",
    "MissingDelimiterPolicy",
    "RcConfig",
    # Document models
    "Row",
    "TabularDocument",
    "LocatedHeader",
    "RowResult",
    # Engine models
    "ColumnDescriptor",
    "CorrelationRecord",
    # Result models
    "ProcessingResult",
]
