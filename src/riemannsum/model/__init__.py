"""
The MODEL layer contains the geometric data structures and the curve backends.
It knows nothing about sampling rules or partitions; it deals with points,
segments, extents and intersections.
"""
