"""Line classifier adapters"""
from .ipqualityscore import IPQualityScoreClassifier

__all__ = ["IPQualityScoreClassifier"]
