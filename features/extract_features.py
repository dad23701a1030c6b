# features/extract_features.py
import argparse

import pandas as pd

from catalog.batch import extract_batch, pooled_identities, training_identities
from catalog.classes import load_class_table, load_lines
from catalog.tables import class_summary, find_duplicates, pooled_table, training_table
from features.config import load_config
from utils.log import setup_logging
from utils.paths import data_path, resolve_under_root_cfg

"""
Batch feature extraction over the training and testing image lists.

End-to-end context:
    1) List plankton classes in the class table (`<superclass>_<subclass>`).
    2) List training and testing image paths, one per line. Training images
       live under a directory named after their class.
    3) Run this script to build the training table (rows grouped by class, in
       class-table order) and the pooled testing table.

Inputs:
    --config: YAML config (paths under `data`, feature parameters under
              `features`).
    --limit:  optional cap on images per class / in the testing list, for
              quick runs.

Outputs:
    Both tables are built in memory with columns
        ['class', 'superclass', 'source', 'fingerprint',
         'size', 'n_pixels', 'whiteness', 'centroid', 'arspread',
         'n_constituents']
    and summarized in the log (image counts and per-class feature means).
"""


def _limited(items, limit):
    return items if limit is None else items[:limit]


def build_tables(cfg, logger, limit=None, progress=True):
    """
    Run both splits and return (training_df, testing_df).

    Steps:
        1) Load the class table and the training list.
        2) Collect training images per class and extract them.
        3) Stack per-class records into the training table.
        4) Load the testing list, label every image with the pooled test
           labels, extract and build the testing table.
    """
    data = cfg["data"]
    logger.info("Loading classification table")
    class_table = load_class_table(data_path(cfg, "class_table"))

    logger.info("Loading list of training images")
    training_files = [str(resolve_under_root_cfg(cfg, f))
                      for f in load_lines(data_path(cfg, "training_list"))]

    per_class = training_identities(class_table, training_files)
    per_class_records = []
    for index, (name, identities) in enumerate(zip(class_table.names, per_class)):
        identities = _limited(identities, limit)
        logger.info("Extracting class %d/%d: %s (%d images)",
                    index + 1, len(class_table), name, len(identities))
        result = extract_batch(identities, cfg, logger=logger, progress=progress, desc=name)
        per_class_records.append(result.records)
    n_training = sum(len(r) for r in per_class_records)
    logger.info("Total training images extracted: %d", n_training)
    train_df = training_table(class_table, per_class_records)

    logger.info("Loading list of testing images")
    testing_files = [str(resolve_under_root_cfg(cfg, f))
                     for f in load_lines(data_path(cfg, "testing_list"))]
    identities = pooled_identities(_limited(testing_files, limit),
                                   name=data.get("test_class", "test_class"),
                                   superclass_name=data.get("test_superclass", "test_superclass"))
    result = extract_batch(identities, cfg, logger=logger, progress=progress, desc="testing")
    logger.info("Total testing images extracted: %d (%d skipped)",
                len(result.records), len(result.failures))
    test_df = pooled_table(result.records)

    all_records = [r for records in per_class_records for r in records] + result.records
    for fp, sources in find_duplicates(all_records).items():
        logger.warning("Identical pixels (%s) in %d images: %s", fp[:8], len(sources), ", ".join(sources))
    return train_df, test_df


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument('--config', required=True)
    ap.add_argument('--limit', type=int, default=None)
    ap.add_argument('--no_progress', action='store_true')
    args = ap.parse_args(argv)

    cfg = load_config(args.config)
    logger = setup_logging(cfg.get("logging", {}).get("level", "INFO"))

    train_df, test_df = build_tables(cfg, logger, limit=args.limit, progress=not args.no_progress)
    with pd.option_context("display.max_columns", None, "display.width", 160):
        logger.info("Training table: %d rows\n%s", len(train_df), class_summary(train_df))
        logger.info("Testing table: %d rows\n%s", len(test_df), test_df.describe())
    logger.info("All done!")
    return train_df, test_df


if __name__ == '__main__':
    main()
