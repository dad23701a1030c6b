"""
catalog: Class Table, Image Lists and Feature Tables
====================================================

Drives feature extraction over a labelled image collection.

Modules:
---------
- classes.py : Class table (`<superclass>_<subclass>`), list files, per-class file matching.
- batch.py   : Sequential extraction that skips undecodable images.
- tables.py  : Training/testing DataFrames with a fixed column order.
"""
