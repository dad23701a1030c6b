"""
utils: Decoding, Logging and Path Helpers
=========================================

Modules:
---------
- decode.py : Primary (8-bit gray) and secondary (depth-preserving) image decoders.
- log.py    : Logging setup for the command-line drivers.
- paths.py  : Resolve config paths under work_root.
"""
