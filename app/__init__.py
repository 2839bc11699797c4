# -*- coding: utf-8 -*-
"""
Land Record Wizard Application Core Module
"""

from .config import Config

__all__ = ["Config"]
