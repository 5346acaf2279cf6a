"""Run configuration and output path conventions."""

import os
from dataclasses import dataclass
from pathlib import Path

from user_graph.analytics.types import DEFAULT_TOP_K

# Environment variable to override the default output directory.
UG_OUTPUT_DIR_ENV = "USER_GRAPH_OUTPUT_DIR"

DEFAULT_OUTPUT_DIR = "outputs"


def default_output_dir() -> str:
    """
    Select the output directory.

    Priority:
    1. USER_GRAPH_OUTPUT_DIR env var override
    2. "outputs" relative to the working directory
    """
    return os.environ.get(UG_OUTPUT_DIR_ENV, "") or DEFAULT_OUTPUT_DIR


@dataclass(frozen=True)
class RunConfig:
    """
    Resolved settings for one run over dataset ``name``.

    Files follow the collector's naming: ``transactions-<name>.txt`` in,
    ``userGraph-<name>.txt`` and ``stats-<name>.txt`` out.
    """

    name: str
    output_dir: str = DEFAULT_OUTPUT_DIR
    input_path: str | None = None
    top_k: int = DEFAULT_TOP_K
    multigraph: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("dataset name must not be empty")
        if self.top_k < 1:
            raise ValueError(f"top_k must be at least 1, got {self.top_k}")

    @property
    def transactions_path(self) -> Path:
        if self.input_path is not None:
            return Path(self.input_path)
        return Path(self.output_dir) / f"transactions-{self.name}.txt"

    @property
    def user_graph_path(self) -> Path:
        return Path(self.output_dir) / f"userGraph-{self.name}.txt"

    @property
    def multigraph_path(self) -> Path:
        return Path(self.output_dir) / f"multiUserGraph-{self.name}.txt"

    @property
    def stats_path(self) -> Path:
        return Path(self.output_dir) / f"stats-{self.name}.txt"
