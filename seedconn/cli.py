"""Command-line interface for seedconn."""

import argparse
import textwrap
from pathlib import Path
from seedconn.core.version import __version__


# ANSI color codes for terminal output
class Colors:
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BOLD = '\033[1m'
    END = '\033[0m'


class ColoredHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Custom formatter with colored section headings."""

    def __init__(self, prog, indent_increment=2, max_help_position=40, width=100):
        super().__init__(prog, indent_increment, max_help_position, width)

    def _format_usage(self, usage, actions, groups, prefix):
        if prefix is None:
            prefix = f'{Colors.BOLD}Usage:{Colors.END} '
        return super()._format_usage(usage, actions, groups, prefix)

    def start_section(self, heading):
        if heading:
            heading = f'{Colors.BOLD}{Colors.CYAN}{heading}{Colors.END}'
        super().start_section(heading)


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser instance with detailed help.
    """

    description = textwrap.dedent(f"""
    {Colors.BOLD}{Colors.GREEN}seedconn v{__version__}{Colors.END}
    Voxel-wise seed connectivity maps (Pearson correlation)

    {Colors.BOLD}Description:{Colors.END}
      For every selected seed, seedconn computes the correlation between the
      seed time series and the time series of every voxel covered by the
      atlas, and writes one map per seed as a 4D NIfTI image.

    {Colors.BOLD}Seed types:{Colors.END}
      • {Colors.CYAN}regions{Colors.END}  - Average time series of each atlas region (default)
      • {Colors.CYAN}nodes{Colors.END}    - Node time series read from --node-data
    """)

    epilog = textwrap.dedent(f"""
    {Colors.BOLD}EXAMPLES{Colors.END}

      {Colors.YELLOW}# Maps for every region whose label contains 'Default'{Colors.END}
      seedconn func.nii.gz atlas.nii.gz maps.nii.gz --labels-file labels.tsv --seeds Default

      {Colors.YELLOW}# Maps for regions 0 and 3 (0-based), using 4 threads{Colors.END}
      seedconn func.nii.gz atlas.nii.gz maps.nii.gz --indices 0 3 --n-jobs 4

      {Colors.YELLOW}# Maps for node responses matching 'NAC'{Colors.END}
      seedconn func.nii.gz atlas.nii.gz maps.nii.gz --mode nodes \\
          --node-data nodes.tsv --seeds NAC

    {Colors.BOLD}CONFIGURATION FILE{Colors.END}

      Options can also be given in a YAML or JSON file (-c). Command-line
      arguments override config file settings.

        mode: regions
        seeds: [Default, Visual]
        labels_file: /path/to/labels.tsv
        n_jobs: 4

    Version: {__version__}
    """)

    parser = argparse.ArgumentParser(
        prog="seedconn",
        description=description,
        epilog=epilog,
        formatter_class=ColoredHelpFormatter,
        add_help=False,
    )

    # =========================================================================
    # REQUIRED ARGUMENTS
    # =========================================================================
    required = parser.add_argument_group(
        f'{Colors.BOLD}Required Arguments{Colors.END}'
    )

    required.add_argument(
        "func_img",
        type=Path,
        metavar="FUNC_IMG",
        help="4D functional image (NIfTI).",
    )

    required.add_argument(
        "atlas_img",
        type=Path,
        metavar="ATLAS_IMG",
        help="3D integer-labeled atlas image (NIfTI). Value k marks region k; "
             "0 is background.",
    )

    required.add_argument(
        "output",
        type=Path,
        metavar="OUTPUT",
        help="Output 4D NIfTI file, one volume per seed. A JSON sidecar with "
             "the seed labels is written next to it.",
    )

    # =========================================================================
    # OPTIONAL ARGUMENTS - General
    # =========================================================================
    general = parser.add_argument_group(
        f'{Colors.BOLD}General Options{Colors.END}'
    )

    general.add_argument(
        "-h", "--help",
        action="help",
        default=argparse.SUPPRESS,
        help="Show this help message and exit.",
    )

    general.add_argument(
        "--version",
        action="version",
        version=f"seedconn {__version__}",
        help="Show program version and exit.",
    )

    general.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output (DEBUG level logging).",
    )

    general.add_argument(
        "--log-file",
        type=Path,
        metavar="FILE",
        help="Also write the log to FILE.",
    )

    general.add_argument(
        "-c", "--config",
        type=Path,
        metavar="FILE",
        help="Path to configuration file (.json, .yaml, or .yml).",
    )

    # =========================================================================
    # OPTIONAL ARGUMENTS - Seed selection
    # =========================================================================
    selection = parser.add_argument_group(
        f'{Colors.BOLD}Seed Selection{Colors.END}'
    )

    selection.add_argument(
        "--mode",
        choices=["regions", "nodes"],
        help="Seed type (default: regions).",
    )

    selection.add_argument(
        "--seeds",
        nargs="+",
        metavar="LABEL",
        help="Label substrings; seeds whose label contains any of them are "
             "selected (case-sensitive). Without --seeds and --indices all "
             "seeds are used.",
    )

    selection.add_argument(
        "--indices",
        nargs="+",
        type=int,
        metavar="INDEX",
        help="0-based seed indices, added to the label matches.",
    )

    selection.add_argument(
        "--exact",
        action="store_true",
        help="Match whole labels instead of substrings.",
    )

    selection.add_argument(
        "--flatten",
        action="store_true",
        help="Reserved for combining matched seeds; currently has no effect.",
    )

    # =========================================================================
    # OPTIONAL ARGUMENTS - Inputs
    # =========================================================================
    inputs = parser.add_argument_group(
        f'{Colors.BOLD}Input Options{Colors.END}'
    )

    inputs.add_argument(
        "--labels-file",
        type=Path,
        metavar="FILE",
        help="Region labels (.txt, one per line, or .tsv with a 'name' column). "
             "Defaults to region_001, region_002, ...",
    )

    inputs.add_argument(
        "--node-data",
        type=Path,
        metavar="FILE",
        help="Node time series (.tsv with node labels as header, or .npy).",
    )

    # =========================================================================
    # OPTIONAL ARGUMENTS - Performance
    # =========================================================================
    performance = parser.add_argument_group(
        f'{Colors.BOLD}Performance Options{Colors.END}'
    )

    performance.add_argument(
        "--n-jobs",
        type=int,
        metavar="N",
        help="Number of worker threads for the correlation (-1 for all cores).",
    )

    performance.add_argument(
        "--chunk-size",
        type=int,
        metavar="N",
        help="Number of voxels correlated per chunk.",
    )

    return parser
