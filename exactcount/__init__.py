"""
Exact combinatorial counting: ballot sequences and integer partitions.
"""
