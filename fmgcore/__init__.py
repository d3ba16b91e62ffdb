# -*- coding: utf-8 -*-
"""Fmg-Lab core: FMG discovery, classification and catalog aggregation."""

__version__ = "0.3.0"
