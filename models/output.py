"""
Output model for published metric data points.

This module defines the wire payload sent to the collector for one metric.
"""
from pydantic import BaseModel


class DataPointModel(BaseModel):
    """One timestamped metric value, as the collector expects it."""

    timeStamp: int
    value: float

    def to_dict(self) -> dict:
        """Convert the model to the JSON body of a collector write."""
        return {
            "timeStamp": self.timeStamp,
            "value": self.value
        }
