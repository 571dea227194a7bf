"""
Fast path: synchronous capture of a transcript into a task.
"""
