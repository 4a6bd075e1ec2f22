"""Exception types raised by the threshold explorer."""


class ThresholdExplorerError(Exception):
    """Base class for all threshold explorer errors."""


class SampleFormatError(ThresholdExplorerError):
    """The sample table is structurally unusable (empty, missing columns)."""


class ZoomValidationError(ThresholdExplorerError, ValueError):
    """A zoom range is not exactly two finite numbers."""
