# vex_fixer/transformer.py
import logging

from .models import Document, TransformResult, KNOWN_STATUSES
from .timestamps import normalize_timestamp
from .errors import TimestampFormatError

logger = logging.getLogger(__name__)

TIMESTAMP_FIELDS = ("timestamp", "last_updated")


def _normalize_field(record, field_name: str, statement_index=None) -> str:
    try:
        return normalize_timestamp(getattr(record, field_name))
    except TimestampFormatError as e:
        raise e.locate(field_name, statement_index)


def transform_document(document: Document) -> TransformResult:
    """
    Rewrites 'timestamp' and 'last_updated' on the document and on every
    statement, in order, and works out whether all statements are 'not_affected'.

    Stops at the first bad timestamp with a TimestampFormatError that names the
    field and statement index (None for the document itself). Nothing on the
    document is modified unless every timestamp converts.
    """
    # Pass 1: convert everything, touching nothing
    doc_values = {name: _normalize_field(document, name) for name in TIMESTAMP_FIELDS}
    statement_values = []
    for idx, statement in enumerate(document.statements):
        statement_values.append({name: _normalize_field(statement, name, idx) for name in TIMESTAMP_FIELDS})

    # Pass 2: apply
    for name, value in doc_values.items():
        setattr(document, name, value)
    for statement, values in zip(document.statements, statement_values):
        for name, value in values.items():
            setattr(statement, name, value)
        if statement.status not in KNOWN_STATUSES:
            logger.debug(f"Statement for '{statement.vulnerability.vuln_id}' has unrecognised status '{statement.status}'")

    all_not_affected = document.all_not_affected
    logger.info(f"Rewrote timestamps of {len(document.statements)} statements (all not_affected: {all_not_affected})")
    return TransformResult(document=document, all_not_affected=all_not_affected)
