"""Default configuration dataclasses for seedconn."""

from dataclasses import dataclass, field
from typing import List, Optional
from pathlib import Path

from seedconn.config.validator import ConfigValidator
from seedconn.connectivity.selection import SeedSelection, REGION_KEYWORDS, NODE_KEYWORDS


@dataclass
class SeedConnectivityConfig:
    """Configuration for a seed connectivity run.

    Attributes:
        mode: Seed type, "regions" (region averages) or "nodes"
        seeds: Label substrings selecting seeds (empty with no indices = all)
        indices: 0-based seed indices, unioned with label matches
        flatten: Reserved; accepted but has no effect
        exact: Match whole labels instead of substrings
        labels_file: Region labels file (.txt, one label per line, or .tsv)
        node_data: Node time series file (.tsv with labels as header, or .npy)
        n_jobs: Number of worker threads for the correlation
        chunk_size: Number of voxels per correlation chunk
    """

    mode: str = "regions"
    seeds: List[str] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    flatten: bool = False
    exact: bool = False

    labels_file: Optional[Path] = None
    node_data: Optional[Path] = None

    n_jobs: int = 1
    chunk_size: Optional[int] = None

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        validator = ConfigValidator()
        validator.check_mode(self.mode, REGION_KEYWORDS + NODE_KEYWORDS)
        validator.check_seeds(self.seeds)
        validator.check_indices(self.indices)
        validator.check_flag(self.flatten, "flatten")
        validator.check_flag(self.exact, "exact")
        validator.check_workers(self.n_jobs, self.chunk_size)
        validator.check_input_file(self.labels_file, "labels_file")
        validator.check_input_file(self.node_data, "node_data")
        validator.raise_if_errors()

    def to_selection(self) -> SeedSelection:
        """Build the seed selection described by this configuration."""
        return SeedSelection(
            mode=self.mode,
            labels=tuple(self.seeds),
            indices=tuple(self.indices),
            flatten=self.flatten,
            exact=self.exact,
        )
