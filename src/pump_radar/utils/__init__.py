# -*- coding: utf-8 -*-
"""Utility modules."""

from pump_radar.utils.validation import clean_str, to_non_negative_float

__all__ = ["clean_str", "to_non_negative_float"]
