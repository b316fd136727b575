"""
CHUK Tuning - microtonal scale arithmetic and tuning file export.

Scales are written as lines (3/2, 7\\12, 1.5, 1,5 or 700 cents), turned
into a 128-note TuningTable and exported to synth and tracker formats.
"""

__version__ = "0.1.0"
