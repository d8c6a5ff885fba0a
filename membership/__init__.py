"""Membership function shapes sharing the evaluate/area/centroid contract."""
