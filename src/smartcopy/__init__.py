"""Recursive directory copy that skips files whose timestamps already match."""
