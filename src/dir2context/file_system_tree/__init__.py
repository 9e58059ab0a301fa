"""Filtered file system tree built by a depth-first directory walk.

This package provides the tree node types, the walker that builds an ordered,
filtered tree from a root directory, and the binary content sniffing used when
file contents are read.
"""
