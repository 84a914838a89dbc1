"""Filesystem tree model and walker.

This package contains:
- probe: classification of a single path without following symlinks
- nodes: Directory, RegularFile and Symlink snapshot nodes
- filters: name-based entry filters used during the walk
- walker: walk_tree(), which assembles the snapshot
"""
