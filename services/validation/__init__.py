# -*- coding: utf-8 -*-
"""Validation services package."""

from .validation_strategy import ValidationStrategy, GenericRequiredFieldsValidator
from .record_validators import EntryCountPolicy
from .validation_factory import ValidationFactory

__all__ = ['ValidationStrategy', 'GenericRequiredFieldsValidator', 'EntryCountPolicy', 'ValidationFactory']
