"""Qute Fighters relay server."""
