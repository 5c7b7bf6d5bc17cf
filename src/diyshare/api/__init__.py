"""
HTTP API for the DIY Share backend
"""
