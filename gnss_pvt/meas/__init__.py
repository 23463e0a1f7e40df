"""meas subpackage."""
"""Synthetic measurement models."""

from gnss_pvt.meas.synthetic import ReceiverTruth, SyntheticMeasurementSource, synthesize_measurements

__all__ = ["ReceiverTruth", "SyntheticMeasurementSource", "synthesize_measurements"]
