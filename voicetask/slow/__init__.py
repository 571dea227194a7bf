"""
Slow path: optional remote re-parsing of utterances.
"""
