# catalog/tables.py
from typing import Dict, Iterable, List, Sequence

import pandas as pd

from catalog.classes import ClassTable
from features.errors import ConfigurationMismatchError
from features.extractor import FeatureRecord
from features.registry import FEATURE_NAMES

"""
Columnar feature tables: one row per image, one column per feature.

Column order is fixed: identity columns first, then the six features in
feature-table order, so training and testing tables line up column for
column.
"""

ID_COLUMNS = ("class", "superclass", "source", "fingerprint")
COLUMNS = ID_COLUMNS + FEATURE_NAMES
INT_FEATURES = ("size", "n_pixels", "n_constituents")


def records_frame(records: Iterable[FeatureRecord]) -> pd.DataFrame:
    df = pd.DataFrame([r.as_row() for r in records], columns=list(COLUMNS))
    for col in FEATURE_NAMES:
        df[col] = df[col].astype("int64" if col in INT_FEATURES else "float64")
    return df


def training_table(class_table: ClassTable,
                   per_class_records: Sequence[List[FeatureRecord]]) -> pd.DataFrame:
    """
    Stack per-class records (given in class-table order) into one table.

    Raises:
        ConfigurationMismatchError: if the number of collections does not
            match the number of classes, or a record sits under the wrong
            class.
    """
    if len(per_class_records) != len(class_table):
        raise ConfigurationMismatchError(
            f"Got {len(per_class_records)} feature collections for "
            f"{len(class_table)} plankton classes"
        )
    rows: List[FeatureRecord] = []
    for name, records in zip(class_table.names, per_class_records):
        for r in records:
            if r.identity.name != name:
                raise ConfigurationMismatchError(
                    f"Record for {r.identity.source} labelled {r.identity.name!r} "
                    f"found under class {name!r}"
                )
        rows.extend(records)
    return records_frame(rows)


def pooled_table(records: Iterable[FeatureRecord]) -> pd.DataFrame:
    return records_frame(records)


def class_summary(df: pd.DataFrame) -> pd.DataFrame:
    """Image count and mean of each feature, per class."""
    if df.empty:
        return pd.DataFrame(columns=["n_images", *FEATURE_NAMES])
    grouped = df.groupby("class", sort=False)
    summary = grouped[list(FEATURE_NAMES)].mean()
    summary.insert(0, "n_images", grouped.size())
    return summary


def find_duplicates(records: Iterable[FeatureRecord]) -> Dict[str, List[str]]:
    """Fingerprint -> sources, for fingerprints shared by more than one image."""
    seen: Dict[str, List[str]] = {}
    for r in records:
        if r.fingerprint not in seen:
            seen[r.fingerprint] = []
        seen[r.fingerprint].append(r.identity.source)
    return {fp: srcs for fp, srcs in seen.items() if len(srcs) > 1}
