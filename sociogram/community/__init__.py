"""
Community detection module for Sociogram.

This module groups people by connected component, or by degree when the
whole graph is one component.
"""

from sociogram.community.detector import (
    CommunityDetector,
    cluster_by_degree,
    count_communities,
    degree_bucket,
    detect_communities,
)

__all__ = [
    "CommunityDetector",
    "cluster_by_degree",
    "count_communities",
    "degree_bucket",
    "detect_communities",
]
