# -*- coding: utf-8 -*-
"""Fmg-Lab command line tools."""
