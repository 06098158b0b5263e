"""Normalization of raw campaign feed records.

The calendar normalizer lives in ``measure_agi.normalize.calendar``; shared
coercion helpers in ``measure_agi.normalize.common``.
"""
