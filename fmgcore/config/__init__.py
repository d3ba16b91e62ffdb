# -*- coding: utf-8 -*-
from fmgcore.config.loader import DEFAULT_CONFIG_PATH, CatalogConfig, resolve_config

__all__ = ["DEFAULT_CONFIG_PATH", "CatalogConfig", "resolve_config"]
