# -*- coding: utf-8 -*-
"""Exceptions raised by the FMG catalog pipeline.

Everything except `UnrecognizedContainerError` aborts a run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from fmgcore.records import FmgRecord


class FmgCatalogError(RuntimeError):
    pass


class RecordError(FmgCatalogError):
    """Error tied to one discovered record."""

    def __init__(self, message: str, record: Optional["FmgRecord"] = None):
        super().__init__(message)
        self.record = record


class MissingGameRootError(FmgCatalogError):
    pass


class BadPathPrefixError(FmgCatalogError):
    pass


class TableFormatError(FmgCatalogError):
    pass


class BinderFormatError(FmgCatalogError):
    pass


class UnrecognizedContainerError(BinderFormatError):
    pass


class UnsupportedCompressionError(BinderFormatError):
    pass


class UnknownCategoryError(RecordError):
    pass


class UnknownLanguageError(RecordError):
    pass


class UnresolvedResourceError(RecordError):
    pass


class ConflictingTypeMappingError(RecordError):
    pass
