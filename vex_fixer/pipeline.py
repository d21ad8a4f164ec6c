#!/usr/bin/env python3
"""
File pipeline for vexfix: read a vex.json, rewrite its timestamps, write the
result and tell the user whether GUAC will ignore it.
"""

import os
import json
import logging
from typing import Optional

from .config import DEFAULT_CONFIG
from .context import RunContext
from .errors import (
    VexFixError,
    FileReadError,
    DocumentDecodeError,
    DocumentEncodeError,
    FileWriteError,
    DirectoryTraversalError,
)
from .models import Document, FileResult, BatchResult
from .transformer import transform_document

logger = logging.getLogger(__name__)


def read_document(input_path: str) -> Document:
    """Reads and decodes a VEX document from disk."""
    try:
        with open(input_path, 'rb') as f:
            raw = f.read()
    except OSError as e:
        raise FileReadError(f"error reading file: {e.strerror or e}", input_path) from e
    return decode_document(raw, input_path)


def decode_document(raw: bytes, source_hint: Optional[str] = None) -> Document:
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, UnicodeDecodeError, oversized integers, runaway nesting
        raise DocumentDecodeError(f"error parsing JSON: {e}", source_hint) from e
    try:
        return Document.from_dict(data)
    except DocumentDecodeError as e:
        raise e.with_path(source_hint) if source_hint else e


def encode_document(document: Document, indent: int = 2) -> bytes:
    """Serializes a document as indented JSON, fields in schema order."""
    try:
        return json.dumps(document.to_dict(), indent=indent, ensure_ascii=False).encode('utf-8')
    except (TypeError, ValueError) as e:
        raise DocumentEncodeError(f"error serializing JSON: {e}") from e


def write_output(output_path: str, payload: bytes):
    try:
        with open(output_path, 'wb') as f:
            f.write(payload)
    except OSError as e:
        raise FileWriteError(f"error writing file {output_path}: {e.strerror or e}") from e


def report_result(result: FileResult, context: RunContext):
    if result.all_not_affected:
        context.warn(
            f"WARNING: All vulnerabilities in {result.input_path} have status 'not_affected', "
            f"GUAC will not take this file into account."
        )
    else:
        context.success(f"Process completed successfully for {result.input_path}.")


def process_file(input_path: str, output_path: str, context: Optional[RunContext] = None, indent: int = 2) -> FileResult:
    """
    Runs one file through read -> decode -> transform -> encode -> write, then
    reports the outcome. Every VexFixError raised carries the input path.
    """
    context = context or RunContext()
    logger.info(f"Processing {input_path} -> {output_path}")

    document = read_document(input_path)
    try:
        transformed = transform_document(document)
        payload = encode_document(transformed.document, indent=indent)
        write_output(output_path, payload)
    except VexFixError as e:
        raise e.with_path(input_path)

    result = FileResult(
        input_path=input_path,
        output_path=output_path,
        all_not_affected=transformed.all_not_affected,
        statement_count=len(transformed.document.statements),
    )
    report_result(result, context)
    return result


def find_vex_files(root: str, target_filename: str = "vex.json", on_error=None) -> list[str]:
    """
    Walks root recursively (sorted, not following directory symlinks) and
    returns every file named exactly target_filename. Unreadable directories
    are passed to on_error as DirectoryTraversalError and skipped.
    """
    if not os.path.isdir(root):
        raise DirectoryTraversalError("not a directory", root)

    def _walk_error(err: OSError):
        traversal_error = DirectoryTraversalError(f"error accessing directory: {err.strerror or err}", err.filename or root)
        logger.warning(str(traversal_error))
        if on_error is not None:
            on_error(traversal_error)

    found = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_walk_error, followlinks=False):
        dirnames.sort()
        for name in sorted(filenames):
            if name == target_filename:
                found.append(os.path.join(dirpath, name))
    logger.debug(f"Found {len(found)} '{target_filename}' files under {root}")
    return found


def run_single(input_path: str, output_path: str, context: Optional[RunContext] = None, config: Optional[dict] = None) -> FileResult:
    """Single-file mode. Errors propagate; the caller decides the exit status."""
    config = config or DEFAULT_CONFIG
    context = context or RunContext()
    with context.progress([input_path], label="Parsing VEX dates") as files:
        for path in files:
            result = process_file(path, output_path, context, indent=config["indent"])
    return result


def run_recursive(root: Optional[str] = None, context: Optional[RunContext] = None, config: Optional[dict] = None) -> BatchResult:
    """
    Recursive mode: processes every target file under root (default: cwd).
    A failing file is reported and skipped; the batch always runs to the end.
    """
    config = config or DEFAULT_CONFIG
    context = context or RunContext()
    root = root or os.getcwd()
    target = config["target_filename"]
    batch = BatchResult()

    def _on_traversal_error(err: DirectoryTraversalError):
        batch.traversal_errors.append(err)
        context.error(str(err))

    batch.discovered = find_vex_files(root, target, on_error=_on_traversal_error)
    if not batch.discovered:
        context.info(f"No '{target}' files were found in {root} or its subdirectories.")
        return batch

    total = len(batch.discovered)
    with context.progress(batch.discovered, label=f"Processing {total} files") as files:
        for input_path in files:
            output_path = os.path.join(os.path.dirname(input_path), config["output_filename"])
            try:
                batch.processed.append(process_file(input_path, output_path, context, indent=config["indent"]))
            except VexFixError as e:
                logger.debug(f"Skipping {input_path}: {e}")
                batch.failures.append(e.with_path(input_path))
                context.error(str(e))

    context.info(
        f"All files have been processed: {len(batch.processed)} succeeded, {batch.failed_count} failed."
    )
    return batch
