# vex_fixer/models.py
from dataclasses import dataclass, field
from typing import Optional

from .errors import VexFixError, DocumentDecodeError, DirectoryTraversalError

NOT_AFFECTED = "not_affected"
KNOWN_STATUSES = ("not_affected", "affected", "fixed", "under_investigation")


def _get_str(data: dict, key: str, where: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DocumentDecodeError(f"field '{where}{key}' must be a string, got {type(value).__name__}")
    return value


def _get_int(data: dict, key: str, where: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    # bool is an int subclass but JSON true/false is not a version number
    if isinstance(value, bool) or not isinstance(value, int):
        raise DocumentDecodeError(f"field '{where}{key}' must be an integer, got {type(value).__name__}")
    return value


def _get_object(data: dict, key: str, where: str) -> dict:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DocumentDecodeError(f"field '{where}{key}' must be an object, got {type(value).__name__}")
    return value


@dataclass
class Vulnerability:
    vuln_id: str = ""
    name: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict, where: str = "vulnerability.") -> "Vulnerability":
        return cls(
            vuln_id=_get_str(data, "@id", where),
            name=_get_str(data, "name", where),
            description=_get_str(data, "description", where),
        )

    def to_dict(self) -> dict:
        return {"@id": self.vuln_id, "name": self.name, "description": self.description}


@dataclass
class Statement:
    vulnerability: Vulnerability = field(default_factory=Vulnerability)
    timestamp: str = ""
    last_updated: str = ""
    status: str = ""
    justification: str = ""
    supplier: str = ""

    @property
    def is_not_affected(self) -> bool:
        # Exact, case-sensitive match
        return self.status == NOT_AFFECTED

    @classmethod
    def from_dict(cls, data: dict, index: int = 0) -> "Statement":
        where = f"statements[{index}]."
        return cls(
            vulnerability=Vulnerability.from_dict(_get_object(data, "vulnerability", where), where + "vulnerability."),
            timestamp=_get_str(data, "timestamp", where),
            last_updated=_get_str(data, "last_updated", where),
            status=_get_str(data, "status", where),
            justification=_get_str(data, "justification", where),
            supplier=_get_str(data, "supplier", where),
        )

    def to_dict(self) -> dict:
        return {
            "vulnerability": self.vulnerability.to_dict(),
            "timestamp": self.timestamp,
            "last_updated": self.last_updated,
            "status": self.status,
            "justification": self.justification,
            "supplier": self.supplier,
        }


@dataclass
class Document:
    context: str = ""
    doc_id: str = ""
    author: str = ""
    role: str = ""
    timestamp: str = ""
    last_updated: str = ""
    version: int = 0
    tooling: str = ""
    statements: list[Statement] = field(default_factory=list)

    @property
    def all_not_affected(self) -> bool:
        """True when every statement is 'not_affected' (or there are none)."""
        return all(s.is_not_affected for s in self.statements)

    @classmethod
    def from_dict(cls, data) -> "Document":
        """
        Builds a Document from decoded JSON. Missing fields take their zero value,
        fields of the wrong type raise DocumentDecodeError, unknown fields are dropped.
        """
        if not isinstance(data, dict):
            raise DocumentDecodeError(f"top-level JSON value must be an object, got {type(data).__name__}")

        raw_statements = data.get("statements")
        if raw_statements is None:
            raw_statements = []
        if not isinstance(raw_statements, list):
            raise DocumentDecodeError(f"field 'statements' must be a list, got {type(raw_statements).__name__}")

        statements = []
        for idx, raw in enumerate(raw_statements):
            if not isinstance(raw, dict):
                raise DocumentDecodeError(f"field 'statements[{idx}]' must be an object, got {type(raw).__name__}")
            statements.append(Statement.from_dict(raw, idx))

        return cls(
            context=_get_str(data, "@context", ""),
            doc_id=_get_str(data, "@id", ""),
            author=_get_str(data, "author", ""),
            role=_get_str(data, "role", ""),
            timestamp=_get_str(data, "timestamp", ""),
            last_updated=_get_str(data, "last_updated", ""),
            version=_get_int(data, "version", ""),
            tooling=_get_str(data, "tooling", ""),
            statements=statements,
        )

    def to_dict(self) -> dict:
        # Insertion order is the output field order
        return {
            "@context": self.context,
            "@id": self.doc_id,
            "author": self.author,
            "role": self.role,
            "timestamp": self.timestamp,
            "last_updated": self.last_updated,
            "version": self.version,
            "tooling": self.tooling,
            "statements": [s.to_dict() for s in self.statements],
        }


@dataclass
class TransformResult:
    document: Document
    all_not_affected: bool


@dataclass
class FileResult:
    input_path: str
    output_path: str
    all_not_affected: bool
    statement_count: int = 0


@dataclass
class BatchResult:
    discovered: list[str] = field(default_factory=list)
    processed: list[FileResult] = field(default_factory=list)
    failures: list[VexFixError] = field(default_factory=list)  # in discovery order
    traversal_errors: list[DirectoryTraversalError] = field(default_factory=list)

    @property
    def failed_count(self) -> int:
        return len(self.failures)

    def failure_for(self, input_path: str) -> Optional[VexFixError]:
        for err in self.failures:
            if err.path == input_path:
                return err
        return None
