"""Parsing utilities for JSON-lines transaction records."""

import json
import logging
import math
from collections.abc import Iterable, Iterator

from user_graph.errors import IoError, ParseError
from user_graph.ingest.interner import AddressInterner
from user_graph.ingest.types import LightTransaction, LoadedTransactions, LoadStats, TxIO

logger = logging.getLogger(__name__)

# 1MB buffer for efficient I/O.
BUFFER_SIZE = 1024 * 1024


def _parse_entries(
    entries: object,
    field: str,
    interner: AddressInterner,
    line_number: int,
    line: str,
) -> tuple[TxIO, ...]:
    if not isinstance(entries, list):
        raise ParseError(f"'{field}' must be a list", line_number, line)

    parsed: list[TxIO] = []
    for entry in entries:
        if not isinstance(entry, list) or len(entry) != 2:
            raise ParseError(f"'{field}' entries must be [address, value] pairs", line_number, line)

        address, value = entry
        if not isinstance(address, str):
            raise ParseError(f"address in '{field}' must be a string", line_number, line)
        # bool is an int subclass but never a monetary amount.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ParseError(f"value in '{field}' must be a number", line_number, line)
        try:
            amount = float(value)
        except OverflowError as exc:
            raise ParseError(f"value in '{field}' out of range", line_number, line) from exc
        # json accepts NaN and Infinity; neither is an amount.
        if not math.isfinite(amount) or amount < 0:
            raise ParseError(
                f"value in '{field}' must be a finite non-negative number", line_number, line
            )

        parsed.append(TxIO(interner.intern(address), amount))

    return tuple(parsed)


def parse_transaction_line(
    raw_line: str,
    interner: AddressInterner,
    line_number: int = 0,
) -> LightTransaction | None:
    """
    Parse one JSON transaction record, interning every address it mentions.

    Returns None for blank lines. Raises ParseError for anything else that is
    not a well-formed record.
    """
    line = raw_line.strip()
    if not line:
        return None

    try:
        record = json.loads(line)
    except json.JSONDecodeError as exc:
        raise ParseError(f"invalid JSON ({exc.msg})", line_number, line) from exc

    if not isinstance(record, dict):
        raise ParseError("record must be a JSON object", line_number, line)
    for field in ("inputs", "outputs"):
        if field not in record:
            raise ParseError(f"missing '{field}'", line_number, line)

    # Inputs are interned before outputs so ids follow record order.
    inputs = _parse_entries(record["inputs"], "inputs", interner, line_number, line)
    outputs = _parse_entries(record["outputs"], "outputs", interner, line_number, line)
    return LightTransaction(inputs, outputs)


def iter_transactions(
    lines: Iterable[str],
    interner: AddressInterner,
    stats: LoadStats | None = None,
) -> Iterator[LightTransaction]:
    """Yield parsed transactions from raw lines, skipping blank lines."""
    if stats is None:
        stats = LoadStats()

    for line_number, raw_line in enumerate(lines, start=1):
        stats.lines_read += 1
        parsed = parse_transaction_line(raw_line, interner, line_number)
        if parsed is None:
            stats.blank_lines += 1
            continue
        stats.transactions += 1
        yield parsed


def load_transactions(input_path: str) -> LoadedTransactions:
    """
    Read a whole transaction file into memory.

    Any malformed record aborts the load, since clusters built from a partial
    transaction set are silently wrong.
    """
    interner = AddressInterner()
    stats = LoadStats()

    try:
        with open(input_path, encoding="utf-8", buffering=BUFFER_SIZE) as handle:
            transactions = list(iter_transactions(handle, interner, stats))
    except (OSError, UnicodeDecodeError) as exc:
        raise IoError(f"cannot read transactions from {input_path}: {exc}") from exc

    logger.debug(
        "Loaded %d transactions (read=%d, blank=%d), %d unique addresses",
        stats.transactions,
        stats.lines_read,
        stats.blank_lines,
        len(interner),
    )
    return LoadedTransactions(transactions, interner.addresses, stats)
