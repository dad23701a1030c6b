# tools/scan_images.py
import argparse
from collections import Counter
from pathlib import Path

import pandas as pd

from catalog.classes import load_lines
from features.config import load_config
from features.errors import DecodeError, InvalidImageError
from features.image import fingerprint
from utils.decode import decode_primary
from utils.log import setup_logging
from utils.paths import resolve_under_root_cfg

"""
Sanity scan of an image list before extraction.

Decodes every listed image and reports image sizes, files that fail to decode
and groups of files with identical pixels (same fingerprint).

python -m tools.scan_images --config configs/config_plankton.yaml --list data/training_files.txt
"""


def scan(paths, logger):
    """
    Returns:
        pd.DataFrame: one row per path with columns
            ['image_path', 'width', 'height', 'fingerprint', 'error'].
    """
    rows = []
    for p in paths:
        row = {"image_path": str(p), "width": None, "height": None,
               "fingerprint": None, "error": None}
        try:
            img = decode_primary(p)
            row.update(width=img.width, height=img.height, fingerprint=fingerprint(img))
        except (DecodeError, InvalidImageError) as exc:
            logger.warning("Unreadable image %s: %s", p, exc)
            row["error"] = str(exc)
        rows.append(row)
    return pd.DataFrame(rows, columns=["image_path", "width", "height", "fingerprint", "error"])


def duplicate_groups(report: pd.DataFrame):
    ok = report.dropna(subset=["fingerprint"])
    groups = ok.groupby("fingerprint")["image_path"].apply(list)
    return {fp: paths for fp, paths in groups.items() if len(paths) > 1}


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", required=True)
    ap.add_argument("--list", action="append", required=True,
                    help="One or more text files with one image path per line")
    args = ap.parse_args(argv)

    cfg = load_config(args.config)
    logger = setup_logging(cfg.get("logging", {}).get("level", "INFO"), name="scan_images")

    paths = []
    for list_path in args.list:
        paths.extend(resolve_under_root_cfg(cfg, f) for f in load_lines(list_path))
    report = scan(paths, logger)

    logger.info("Total images scanned: %d", len(report))
    sizes = Counter(zip(report["width"].dropna().astype(int), report["height"].dropna().astype(int)))
    for (w, h), cnt in sizes.most_common(10):
        logger.info("  %dx%d : %d", w, h, cnt)

    failed = report[report["error"].notna()]
    if len(failed):
        logger.warning("Unreadable images: %d", len(failed))
    dups = duplicate_groups(report)
    for fp, group in dups.items():
        logger.warning("Duplicate pixels %s: %s", fp[:8], ", ".join(Path(g).name for g in group))
    if not dups:
        logger.info("No duplicate images found.")
    return report


if __name__ == "__main__":
    main()
