"""Acoustic levitation: field propagation, Gor'kov forces, field plots, board calibration files and board messages."""

__version__ = "0.1.0"