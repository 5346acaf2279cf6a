"""Shared type definitions for transaction ingestion."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import NamedTuple


class TxIO(NamedTuple):
    """One transaction input or output, referring to its address by id."""

    address: int
    value: float


@dataclass(frozen=True, slots=True)
class LightTransaction:
    """Id-based transaction. Order of inputs and outputs is significant."""

    inputs: tuple[TxIO, ...]
    outputs: tuple[TxIO, ...]


@dataclass
class LoadStats:
    """Statistics from load_transactions operation."""

    lines_read: int = 0
    blank_lines: int = 0
    transactions: int = 0


@dataclass(frozen=True, slots=True)
class LoadedTransactions:
    """Everything the loader hands to the core."""

    transactions: list[LightTransaction]
    addresses: Sequence[str]
    stats: LoadStats
