"""
plankton_features: Shape/Intensity Feature Extraction for Plankton Images
=========================================================================

Computes a compact, fixed-order feature vector from a grayscale image of a
single microscopic organism, for use by a downstream classifier.

Main Modules:
--------------
• features  – Feature algorithms and the extract_features entry point
• catalog   – Class table, image lists, batch extraction and feature tables
• utils     – Image decoding, logging setup and path helpers
• tools     – Pre-extraction sanity scans
• tests     – Unit tests pinning feature values on synthetic images

Highlights:
-----------
- Six features: size, n_pixels, whiteness, centroid, arspread, n_constituents
- Pure, thread-safe extraction over immutable images
- MD5 pixel fingerprint for duplicate detection

Usage:
------
To scan an image list and extract the training/testing tables:
    $ python -m tools.scan_images --config configs/config_plankton.yaml --list data/training_files.txt
    $ python -m features.extract_features --config configs/config_plankton.yaml
"""
