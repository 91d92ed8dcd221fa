"""
3D三目並べ HTTP API
"""
