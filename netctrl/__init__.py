# -*- coding: utf-8 -*-
"""
netctrl: structural controllability of complex networks.

Finds the driver nodes that have to receive an independent input signal to
control a network, decomposes the network into control paths and classifies
the edges by their role in the driver node configuration.
"""

__version__ = "0.2.0"

from netctrl.errors import (NetctrlError, NoGraphError, NotSupportedError,
                            UnknownGraphFormatError, VertexSetSpecParseError)
from netctrl.graph import Graph, Mode
from netctrl.matching import DirectedMatching, Direction
from netctrl.model import (ControllabilityMeasure, ControllabilityModel,
                           EdgeClass, LiuControllabilityModel,
                           SwitchboardControllabilityModel)
from netctrl.paths import Bud, ClosedWalk, ControlPath, OpenWalk, Stem

__all__ = [
    "Bud", "ClosedWalk", "ControlPath", "ControllabilityMeasure",
    "ControllabilityModel", "DirectedMatching", "Direction", "EdgeClass",
    "Graph", "LiuControllabilityModel", "Mode", "NetctrlError", "NoGraphError",
    "NotSupportedError", "OpenWalk", "Stem", "SwitchboardControllabilityModel",
    "UnknownGraphFormatError", "VertexSetSpecParseError",
]
