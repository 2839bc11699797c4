# -*- coding: utf-8 -*-
"""
Land Record Data Models
"""

from .area import AreaInput
from .land_basic_info import LandBasicInfo
from .year_slab import SlabEntry, YearSlab
from .panipatrak import Farmer, Panipatrak
from .nondh import Nondh
from .nondh_detail import NondhDetail, OwnerRelation

__all__ = [
    "AreaInput",
    "LandBasicInfo",
    "SlabEntry",
    "YearSlab",
    "Farmer",
    "Panipatrak",
    "Nondh",
    "NondhDetail",
    "OwnerRelation",
]
