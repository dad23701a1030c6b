# catalog/batch.py
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from tqdm import tqdm

from catalog.classes import ClassTable, files_for_class
from features.errors import DecodeError, InvalidImageError
from features.extractor import FeatureRecord, Identity, extract_record
from features.image import GrayscaleImage
from utils.decode import decode_pair

"""
Sequential batch extraction over a list of source images.

A failure to decode (or a degenerate image) only drops that one image: it is
logged with its identity and recorded in BatchResult.failures, and the batch
carries on. Any other exception propagates.
"""

Decoder = Callable[[str], Tuple[GrayscaleImage, GrayscaleImage]]


@dataclass
class BatchResult:
    records: List[FeatureRecord] = field(default_factory=list)
    failures: List[Tuple[Identity, str]] = field(default_factory=list)

    def __len__(self):
        return len(self.records)


def training_identities(class_table: ClassTable, files: Iterable[str]) -> List[List[Identity]]:
    """Identities per class, in class-table order (empty lists included)."""
    files = list(files)
    out = []
    for name in class_table.names:
        out.append([Identity(name=name, superclass_name=class_table.superclass[name], source=f)
                    for f in files_for_class(name, files)])
    return out


def pooled_identities(files: Iterable[str], name: str = "test_class",
                      superclass_name: str = "test_superclass") -> List[Identity]:
    return [Identity(name=name, superclass_name=superclass_name, source=f) for f in files]


def extract_batch(identities: Iterable[Identity],
                  config: Optional[Dict[str, Any]] = None,
                  logger: Optional[logging.Logger] = None,
                  decoder: Decoder = decode_pair,
                  progress: bool = False,
                  desc: str = "extract") -> BatchResult:
    """
    Decode and extract every identity's source image.

    Args:
        identities: images to process, each with its class labels.
        config: feature config passed through to extract_record.
        logger: where skipped images are reported.
        decoder: source -> (primary, secondary).
        progress: show a tqdm bar.
    """
    logger = logger or logging.getLogger(__name__)
    result = BatchResult()
    identities = list(identities)
    for identity in tqdm(identities, desc=desc, leave=False, disable=not progress):
        try:
            primary, secondary = decoder(identity.source)
            result.records.append(extract_record(primary, secondary, identity, config))
        except (DecodeError, InvalidImageError) as exc:
            logger.warning("Skipping %s [%s]: %s", identity.source, identity.name, exc)
            result.failures.append((identity, str(exc)))
    return result
