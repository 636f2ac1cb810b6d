"""
Server-rendered pages.
"""
