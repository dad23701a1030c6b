"""
features: Shape and Intensity Features of Plankton Images
=========================================================

Turns a decoded grayscale image of a single organism into a fixed,
ordered vector of six descriptors plus a pixel fingerprint.

Modules:
---------
- image.py            : Immutable GrayscaleImage value and its fingerprint.
- intensity.py        : Mean, intensity remap, white/black thresholds.
- centroid.py         : Foreground centroid offset from the image center.
- aspect.py           : Rotation sweep, trim and aspect-ratio spread.
- components.py       : Dilated connected-region count.
- registry.py         : Ordered feature table (name -> computation).
- extractor.py        : extract_features / extract_record entry points.
- extract_features.py : Batch CLI over training and testing lists.

Extracted Features:
-------------------
- size           : Pixel count (width * height).
- n_pixels       : Pixels that are not pure white.
- whiteness      : Mean of the mean-thresholded image, in [0, 1].
- centroid       : Distance of the foreground centroid from the center.
- arspread       : Std of silhouette aspect ratios over 0..180 degrees.
- n_constituents : Connected regions above 100 pixels, minus background.
"""
