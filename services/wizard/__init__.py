# -*- coding: utf-8 -*-
"""Wizard services package."""

from .step_validator import StepValidator

__all__ = ['StepValidator']
