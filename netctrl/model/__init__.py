# -*- coding: utf-8 -*-
"""Controllability models."""

from netctrl.model.base import ControllabilityModel, EdgeClass
from netctrl.model.liu import LiuControllabilityModel
from netctrl.model.switchboard import (ControllabilityMeasure,
                                       SwitchboardControllabilityModel)

__all__ = [
    "ControllabilityMeasure", "ControllabilityModel", "EdgeClass",
    "LiuControllabilityModel", "SwitchboardControllabilityModel",
]
