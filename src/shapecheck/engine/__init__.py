"""Spec algebra: the compiled Leaf, Variant and Collection forms of schemas."""
