"""Serializations of a filtered tree and its file contents."""
