# -*- coding: utf-8 -*-
"""Exceptions raised by the netctrl package."""


class NetctrlError(Exception):
    """Base class for all errors raised by netctrl."""


class NoGraphError(NetctrlError):
    """Raised when a model is asked to work without a graph attached."""

    def __init__(self, message="no graph is attached to the model"):
        super().__init__(message)


class NotSupportedError(NetctrlError):
    """Raised when a model does not support the requested operation."""

    def __init__(self, message="This operation is not supported"):
        super().__init__(message)


class UnknownGraphFormatError(NetctrlError):
    """Raised when the format of a graph file cannot be determined."""

    def __init__(self, filename=""):
        self.filename = filename
        if filename:
            super().__init__(f"unknown graph format: {filename}")
        else:
            super().__init__("unknown graph format")


class VertexSetSpecParseError(NetctrlError):
    """Raised when a vertex set specification cannot be parsed."""

    def __init__(self, spec):
        self.spec = spec
        super().__init__(f"Cannot parse vertex set specification: '{spec}'")
