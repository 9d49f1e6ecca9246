"""
On-disk store operations: JSON I/O, path guarding, deletion and form writes.
"""
