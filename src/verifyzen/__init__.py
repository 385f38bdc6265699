"""VerifyZen - candidate background verification.

The core of the package is timeline consistency analysis: detecting gaps and
overlaps in a candidate's work and education history and turning them into
flags and a bounded risk score.
"""

__version__ = "1.0.0"
