"""
mkvsubs - Extract subtitle tracks from MKV files.

Probes a Matroska file for subtitle streams, lets the user pick the tracks
to keep, and stream-copies each one into a standalone subtitle file named
after the source, stream index, and language.
"""

__version__ = "0.1.0"
