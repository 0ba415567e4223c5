"""
rfcindex - metadata index for the RFC corpus.

Reconciles hand-curated records, the source repository text and tracker
labels into one JSON record per RFC.
"""

__version__ = "0.2.0"
