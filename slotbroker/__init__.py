"""
slotbroker - availability resolution for voice-call appointment booking.
"""

__version__ = "0.1.0"
