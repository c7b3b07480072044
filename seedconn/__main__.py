"""Main entry point for seedconn."""

import sys
import logging
from dataclasses import asdict
from typing import List, Optional

from seedconn.cli import create_parser
from seedconn.config.defaults import SeedConnectivityConfig
from seedconn.config.loader import load_config_file, config_from_dict
from seedconn.connectivity.seed_connectivity import seed_connectivity
from seedconn.core.version import __version__
from seedconn.io.readers import load_labels_file, load_node_data, load_pathway
from seedconn.io.writers import save_connectivity_maps
from seedconn.utils.logging import setup_logging, log_section


def build_config(args, logger: logging.Logger) -> SeedConnectivityConfig:
    """Merge the config file (if any) with command-line overrides.

    Args:
        args: Parsed CLI arguments.
        logger: Logger instance.

    Returns:
        Validated SeedConnectivityConfig
    """
    if args.config:
        logger.info(f"Loading configuration from: {args.config}")
        config = config_from_dict(load_config_file(args.config))
    else:
        logger.info("Using default configuration")
        config = SeedConnectivityConfig()

    if args.mode:
        config.mode = args.mode
    if args.seeds:
        config.seeds = list(args.seeds)
    if args.indices:
        config.indices = list(args.indices)
    if args.exact:
        config.exact = True
    if args.flatten:
        config.flatten = True
    if args.labels_file:
        config.labels_file = args.labels_file
    if args.node_data:
        config.node_data = args.node_data
    if args.n_jobs is not None:
        config.n_jobs = args.n_jobs
    if args.chunk_size is not None:
        config.chunk_size = args.chunk_size

    config.validate()

    return config


def main(argv: Optional[List[str]] = None):
    """Main entry point for seedconn.

    Parses command-line arguments, builds the pathway from the input
    images, computes the connectivity maps and saves them.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logger = setup_logging(verbose=args.verbose, log_file=args.log_file)

    log_section(logger, f"seedconn v{__version__}")

    try:
        config = build_config(args, logger)
        selection = config.to_selection()
        logger.info(f"Seed selection: {selection}")

        labels = load_labels_file(config.labels_file) if config.labels_file else None

        node_dat, node_labels = None, None
        if config.node_data:
            node_dat, node_labels = load_node_data(config.node_data)

        pathway = load_pathway(
            args.func_img,
            args.atlas_img,
            labels=labels,
            node_dat=node_dat,
            node_labels=node_labels,
            logger=logger,
        )
        logger.info(f"Loaded {pathway}")

        maps = seed_connectivity(
            pathway,
            selection,
            logger=logger,
            n_jobs=config.n_jobs,
            chunk_size=config.chunk_size,
        )

        if maps is None:
            logger.warning("No connectivity maps computed, nothing written")
        else:
            save_connectivity_maps(maps, args.output, {"RunSettings": asdict(config)})
            logger.info(f"Saved {len(maps)} map(s): {args.output}")

        log_section(logger, "Analysis completed successfully!")

    except Exception as e:
        logger.error(f"Analysis failed: {e}")
        if args.verbose:
            logger.exception("Full traceback:")
        sys.exit(1)


if __name__ == "__main__":
    main()
